"""
Runtime configuration for the airdrop tooling.

Values come from the environment (a local .env is loaded first):
    AIRDROP_CLAIM_AMOUNT    Amount credited per claim, in base units (default: 2 ether)
    AIRDROP_ADMIN           Administrator address allowed to rotate the root
    AIRDROP_LOG_LEVEL       Log level (default: INFO)
    AIRDROP_OUTPUT          Default output file for `build` (default: merkle_data.json)
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv
from eth_utils import to_wei

load_dotenv()

DEFAULT_CLAIM_AMOUNT = to_wei(2, "ether")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass
class AirdropConfig:
    claim_amount: int = field(default_factory=lambda: _env_int("AIRDROP_CLAIM_AMOUNT", DEFAULT_CLAIM_AMOUNT))
    admin: Optional[str] = field(default_factory=lambda: os.getenv("AIRDROP_ADMIN") or None)
    log_level: str = field(default_factory=lambda: os.getenv("AIRDROP_LOG_LEVEL", "INFO"))
    output: str = field(default_factory=lambda: os.getenv("AIRDROP_OUTPUT", "merkle_data.json"))


def load_config() -> AirdropConfig:
    return AirdropConfig()
