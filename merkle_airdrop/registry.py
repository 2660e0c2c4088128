import logging
import threading
from typing import Optional, Set, Union

from eth_utils import to_checksum_address

from merkle_airdrop.errors import AlreadyClaimed, InvalidAddress, Unauthorized
from merkle_airdrop.leaf import AddressLike, normalize
from merkle_airdrop.verify import format_hash, parse_root

logger = logging.getLogger(__name__)


class ClaimRegistry:
    """
    Trusted claim state: the current merkle root, the administrator allowed to
    rotate it, and the set of addresses that already claimed.

    An address moves NotClaimed -> Claimed exactly once, passing through a short
    reservation while the claim is paid out. Rotating the root never
    touches claim records.
    """

    def __init__(self, admin: AddressLike, root: Union[str, bytes]):
        self._admin = normalize(admin)
        self._root = parse_root(root)
        self._claimed: Set[bytes] = set()
        self._pending: Set[bytes] = set()
        self._lock = threading.Lock()

    @property
    def admin(self) -> str:
        return to_checksum_address(self._admin)

    @property
    def claimed_count(self) -> int:
        with self._lock:
            return len(self._claimed)

    def current_root(self) -> bytes:
        with self._lock:
            return self._root

    def has_claimed(self, addr: AddressLike) -> bool:
        b20 = normalize(addr)
        with self._lock:
            return b20 in self._claimed

    def set_root(self, root: Union[str, bytes], caller: AddressLike) -> None:
        try:
            authorized = normalize(caller) == self._admin
        except InvalidAddress:
            authorized = False
        if not authorized:
            logger.warning("Rejected root rotation from unauthorized caller")
            raise Unauthorized()
        new_root = parse_root(root)
        with self._lock:
            old_root, self._root = self._root, new_root
        logger.info("Merkle root rotated: %s -> %s", format_hash(old_root), format_hash(new_root))

    def reserve_claim(self, addr: AddressLike, caller: Optional[AddressLike] = None) -> bytes:
        """
        Compare-and-set NotClaimed -> reserved. The membership test and the insert
        share one critical section, so only one caller can hold an address.
        A reservation must end in `commit_claim` or `release_claim`.
        """
        b20 = normalize(addr)
        with self._lock:
            if b20 in self._claimed or b20 in self._pending:
                raise AlreadyClaimed()
            self._pending.add(b20)
        logger.debug("Reserved claim for %s (caller %s)", to_checksum_address(b20), caller)
        return b20

    def commit_claim(self, addr: AddressLike) -> None:
        b20 = normalize(addr)
        with self._lock:
            if b20 not in self._pending:
                raise KeyError(f"No reserved claim for {to_checksum_address(b20)}")
            self._pending.remove(b20)
            self._claimed.add(b20)
        logger.debug("Recorded claim for %s", to_checksum_address(b20))

    def release_claim(self, addr: AddressLike) -> None:
        b20 = normalize(addr)
        with self._lock:
            self._pending.discard(b20)
        logger.debug("Released claim reservation for %s", to_checksum_address(b20))

    def record_claim(self, addr: AddressLike, caller: Optional[AddressLike] = None) -> None:
        b20 = self.reserve_claim(addr, caller)
        self.commit_claim(b20)
