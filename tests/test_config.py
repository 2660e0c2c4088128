import pytest

from merkle_airdrop import InMemoryLedger, build, create_engine
from merkle_airdrop.config import DEFAULT_CLAIM_AMOUNT, AirdropConfig, load_config

from conftest import ADMIN, USER1, WHITELIST


def test_defaults(monkeypatch):
    for name in ("AIRDROP_CLAIM_AMOUNT", "AIRDROP_ADMIN", "AIRDROP_LOG_LEVEL", "AIRDROP_OUTPUT"):
        monkeypatch.delenv(name, raising=False)
    config = load_config()
    assert config.claim_amount == DEFAULT_CLAIM_AMOUNT == 2 * 10**18
    assert config.admin is None
    assert config.log_level == "INFO"
    assert config.output == "merkle_data.json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("AIRDROP_CLAIM_AMOUNT", "500")
    monkeypatch.setenv("AIRDROP_ADMIN", ADMIN)
    monkeypatch.setenv("AIRDROP_LOG_LEVEL", "DEBUG")
    config = load_config()
    assert config.claim_amount == 500
    assert config.admin == ADMIN
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["lots", "-1"])
def test_bad_amount(monkeypatch, raw):
    monkeypatch.setenv("AIRDROP_CLAIM_AMOUNT", raw)
    with pytest.raises(ValueError):
        load_config()


def test_create_engine_from_config():
    tree = build(WHITELIST)
    ledger = InMemoryLedger()
    engine = create_engine(tree.root, AirdropConfig(claim_amount=7, admin=ADMIN), ledger)
    engine.claim(USER1, tree.proof_for(USER1))
    assert ledger.balance_of(USER1) == 7
    assert engine.registry.admin.lower() == ADMIN


def test_create_engine_requires_admin():
    with pytest.raises(ValueError):
        create_engine(build(WHITELIST).root, AirdropConfig(claim_amount=1, admin=None))
