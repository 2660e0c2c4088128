import threading
from typing import Dict, Protocol

from merkle_airdrop.leaf import AddressLike, normalize


class TokenLedger(Protocol):
    def credit(self, addr: AddressLike, amount: int) -> None:
        ...


class InMemoryLedger:
    """Balance book used by the claim engine when no external token ledger is wired in."""

    def __init__(self):
        self._balances: Dict[bytes, int] = {}
        self._total_supply = 0
        self._lock = threading.Lock()

    def credit(self, addr: AddressLike, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot credit a negative amount: {amount}")
        b20 = normalize(addr)
        with self._lock:
            self._balances[b20] = self._balances.get(b20, 0) + amount
            self._total_supply += amount

    def balance_of(self, addr: AddressLike) -> int:
        b20 = normalize(addr)
        with self._lock:
            return self._balances.get(b20, 0)

    @property
    def total_supply(self) -> int:
        with self._lock:
            return self._total_supply
