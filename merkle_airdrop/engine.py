import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from eth_utils import to_checksum_address

from merkle_airdrop.config import AirdropConfig, load_config
from merkle_airdrop.errors import AlreadyClaimed, NotWhitelisted
from merkle_airdrop.leaf import AddressLike, leaf_hash, normalize
from merkle_airdrop.ledger import InMemoryLedger, TokenLedger
from merkle_airdrop.registry import ClaimRegistry
from merkle_airdrop.verify import parse_proof, verify_proof

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClaimResult:
    claimant: str
    amount: int


class ClaimEngine:
    def __init__(self, registry: ClaimRegistry, ledger: TokenLedger, amount: int):
        if amount < 0:
            raise ValueError(f"Claim amount must not be negative: {amount}")
        self.registry = registry
        self.ledger = ledger
        self.amount = amount

    def claim(self, claimant: AddressLike, proof: Iterable[Union[str, bytes]]) -> ClaimResult:
        """
        Credit the fixed amount to `claimant` if `proof` places it under the
        registry's current root and it has not claimed before.

        Raises AlreadyClaimed, NotWhitelisted, MalformedProof or InvalidAddress.
        Nothing is recorded or credited unless the proof verifies, and a failed
        credit leaves the address unclaimed.
        """
        b20 = normalize(claimant)
        checksum = to_checksum_address(b20)

        if self.registry.has_claimed(b20):
            logger.info("Claim rejected for %s: already claimed", checksum)
            raise AlreadyClaimed()

        pf = parse_proof(proof)
        if not verify_proof(leaf_hash(b20), pf, self.registry.current_root()):
            logger.info("Claim rejected for %s: not whitelisted", checksum)
            raise NotWhitelisted()

        # a concurrent claim may have landed since the first check
        try:
            self.registry.reserve_claim(b20, caller=checksum)
        except AlreadyClaimed:
            logger.info("Claim rejected for %s: lost race to a concurrent claim", checksum)
            raise

        try:
            self.ledger.credit(b20, self.amount)
        except Exception:
            self.registry.release_claim(b20)
            logger.warning("Credit failed for %s, claim reservation released", checksum)
            raise
        self.registry.commit_claim(b20)

        logger.info("Claimed %d for %s", self.amount, checksum)
        return ClaimResult(claimant=checksum, amount=self.amount)


def create_engine(
    root: Union[str, bytes],
    config: Optional[AirdropConfig] = None,
    ledger: Optional[TokenLedger] = None,
) -> ClaimEngine:
    """Wire a registry and engine from AirdropConfig (AIRDROP_ADMIN, AIRDROP_CLAIM_AMOUNT)."""
    config = config or load_config()
    if not config.admin:
        raise ValueError("AIRDROP_ADMIN is not configured")
    registry = ClaimRegistry(config.admin, root)
    return ClaimEngine(registry, ledger if ledger is not None else InMemoryLedger(), config.claim_amount)
