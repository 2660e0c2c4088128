from typing import Iterable, Sequence, Tuple, Union

from web3 import Web3

from merkle_airdrop.errors import InvalidRoot, MalformedProof

HASH_SIZE = 32
MAX_PROOF_DEPTH = 256

Proof = Tuple[bytes, ...]


def hash_pair(a: bytes, b: bytes) -> bytes:
    # sorted pair hashing to match OpenZeppelin's MerkleProof standard pattern
    if a > b:
        a, b = b, a
    return bytes(Web3.solidity_keccak(["bytes32", "bytes32"], [a, b]))


def format_hash(h: bytes) -> str:
    return "0x" + bytes(h).hex()


def _hash_from(value: Union[str, bytes], error) -> bytes:
    if isinstance(value, str):
        text = value.strip()
        if text.startswith(("0x", "0X")):
            text = text[2:]
        try:
            value = bytes.fromhex(text)
        except ValueError:
            raise error(f"Invalid hex value: {value!r}")
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_SIZE:
        raise error(f"Expected a {HASH_SIZE} byte hash, got {value!r}")
    return bytes(value)


def parse_root(value: Union[str, bytes]) -> bytes:
    return _hash_from(value, InvalidRoot)


def parse_proof(items: Iterable[Union[str, bytes]]) -> Proof:
    """Decode a transported proof (hex strings or raw hashes) into a tuple of 32 byte values."""
    proof = tuple(_hash_from(item, MalformedProof) for item in items)
    if len(proof) > MAX_PROOF_DEPTH:
        raise MalformedProof(f"Proof has {len(proof)} elements, max depth is {MAX_PROOF_DEPTH}")
    return proof


def process_proof(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    if len(proof) > MAX_PROOF_DEPTH:
        raise MalformedProof(f"Proof has {len(proof)} elements, max depth is {MAX_PROOF_DEPTH}")
    if not isinstance(leaf, (bytes, bytearray)) or len(leaf) != HASH_SIZE:
        raise MalformedProof("Leaf must be a 32 byte hash")
    h = bytes(leaf)
    for p in proof:
        if not isinstance(p, (bytes, bytearray)) or len(p) != HASH_SIZE:
            raise MalformedProof(f"Proof element must be a 32 byte hash, got {p!r}")
        h = hash_pair(h, bytes(p))
    return h


def verify_proof(leaf: bytes, proof: Sequence[bytes], root: bytes) -> bool:
    """
    Fold `leaf` with every sibling in `proof` and compare against `root`.

    Siblings carry no side marker: pairs are hashed in sorted order, and the
    proof length varies with the leaf's depth in the tree. A structurally valid proof
    that does not reproduce the root returns False; a structurally broken one
    raises MalformedProof.
    """
    if not isinstance(root, (bytes, bytearray)) or len(root) != HASH_SIZE:
        raise InvalidRoot()
    return process_proof(leaf, proof) == bytes(root)
