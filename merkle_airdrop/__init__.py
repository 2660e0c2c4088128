"""Merkle whitelist airdrop: tree building, proof verification and one-time claims."""

from merkle_airdrop.engine import ClaimEngine, ClaimResult, create_engine
from merkle_airdrop.errors import (
    AirdropError,
    AlreadyClaimed,
    EmptyWhitelist,
    InvalidAddress,
    InvalidRoot,
    LeafNotFound,
    MalformedProof,
    NotWhitelisted,
    Unauthorized,
)
from merkle_airdrop.leaf import encode, leaf_hash, normalize, to_checksum
from merkle_airdrop.ledger import InMemoryLedger, TokenLedger
from merkle_airdrop.registry import ClaimRegistry
from merkle_airdrop.tree import MerkleTree, build, load_tree
from merkle_airdrop.verify import MAX_PROOF_DEPTH, format_hash, hash_pair, parse_proof, parse_root, verify_proof

__version__ = "0.1.0"

__all__ = [
    "AirdropError",
    "AlreadyClaimed",
    "ClaimEngine",
    "ClaimRegistry",
    "ClaimResult",
    "EmptyWhitelist",
    "InMemoryLedger",
    "InvalidAddress",
    "InvalidRoot",
    "LeafNotFound",
    "MAX_PROOF_DEPTH",
    "MalformedProof",
    "MerkleTree",
    "NotWhitelisted",
    "TokenLedger",
    "Unauthorized",
    "build",
    "create_engine",
    "encode",
    "format_hash",
    "hash_pair",
    "leaf_hash",
    "load_tree",
    "normalize",
    "parse_proof",
    "parse_root",
    "to_checksum",
    "verify_proof",
]
