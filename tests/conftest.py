"""Shared fixtures for the merkle airdrop tests."""

import pytest

from merkle_airdrop import ClaimEngine, ClaimRegistry, InMemoryLedger, build

# hardhat default accounts, lowercase so the fixtures never depend on checksum casing
ADMIN = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
USER1 = "0x70997970c51812dc3a010c7d01b50e0d17dc79c8"
USER2 = "0x3c44cdddb6a900fa2b585dd299e03d12fa4293bc"
USER3 = "0x90f79bf6eb2c4f870365e785982e1f101e93b906"
USER4 = "0x15d34aaf54267db7d7c367839aaf71a00a2c6a65"
OUTSIDER = "0x9965507d1a55bcc2695c58ba16fb37d819b0a4dc"

WHITELIST = [USER1, USER2, USER3]

AMOUNT = 2 * 10**18


@pytest.fixture
def whitelist():
    return list(WHITELIST)


@pytest.fixture
def tree(whitelist):
    return build(whitelist)


@pytest.fixture
def registry(tree):
    return ClaimRegistry(ADMIN, tree.root)


@pytest.fixture
def ledger():
    return InMemoryLedger()


@pytest.fixture
def engine(registry, ledger):
    return ClaimEngine(registry, ledger, AMOUNT)
