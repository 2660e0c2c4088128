import logging
from typing import Any, Dict, Iterable, List, Tuple

from eth_utils import to_checksum_address

from merkle_airdrop.errors import EmptyWhitelist, LeafNotFound
from merkle_airdrop.leaf import AddressLike, leaf_hash, normalize
from merkle_airdrop.verify import Proof, format_hash, hash_pair, parse_root

logger = logging.getLogger(__name__)

DUMP_FORMAT = "merkle-airdrop-v1"


class MerkleTree:
    """
    Binary Merkle tree over whitelisted addresses, laid out like OpenZeppelin's
    `StandardMerkleTree` with `sortLeaves: true`.

    Leaves are sorted by byte value, so the root does not depend on the order of
    the input list. The tree is one complete binary tree stored in a flat list of
    2n - 1 nodes: leaf i sits at `nodes[-1 - i]` and every parent is
    `nodes[i] = hash_pair(nodes[2i + 1], nodes[2i + 2])`. Proofs are computed once per leaf.
    """

    def __init__(self, entries: List[Tuple[bytes, bytes]]):
        if not entries:
            raise EmptyWhitelist()
        entries = sorted(entries, key=lambda e: e[1])
        self.addresses: List[bytes] = [a for a, _ in entries]
        self.leaves: List[bytes] = [l for _, l in entries]
        self.nodes = self._build_tree(self.leaves)
        self._index: Dict[bytes, int] = {}
        for i, lf in enumerate(self.leaves):
            self._index.setdefault(lf, i)
        self._proofs: Dict[bytes, Proof] = {
            lf: self._proof(i) for lf, i in self._index.items()
        }

    @staticmethod
    def _build_tree(leaves: List[bytes]) -> List[bytes]:
        tree: List[bytes] = [b""] * (2 * len(leaves) - 1)
        for i, lf in enumerate(leaves):
            tree[len(tree) - 1 - i] = lf
        for i in range(len(tree) - 1 - len(leaves), -1, -1):
            tree[i] = hash_pair(tree[2 * i + 1], tree[2 * i + 2])
        return tree

    def _proof(self, leaf_idx: int) -> Proof:
        pf = []
        idx = len(self.nodes) - 1 - leaf_idx
        while idx > 0:
            sib = idx + 1 if idx % 2 == 1 else idx - 1
            pf.append(self.nodes[sib])
            idx = (idx - 1) // 2
        return tuple(pf)

    @property
    def root(self) -> bytes:
        return self.nodes[0]

    @property
    def depth(self) -> int:
        return len(self.nodes).bit_length() - 1

    def __len__(self) -> int:
        return len(self.leaves)

    def __contains__(self, addr) -> bool:
        try:
            return leaf_hash(addr) in self._index
        except ValueError:
            return False

    def proof_for(self, addr: AddressLike) -> Proof:
        lf = leaf_hash(addr)
        try:
            return self._proofs[lf]
        except KeyError:
            raise LeafNotFound()

    def dump(self) -> Dict[str, Any]:
        entries = []
        for addr, lf in zip(self.addresses, self.leaves):
            entries.append({
                "address": to_checksum_address(addr),
                "leaf": format_hash(lf),
                "proof": [format_hash(p) for p in self._proofs[lf]],
            })
        return {
            "format": DUMP_FORMAT,
            "root": format_hash(self.root),
            "count": len(self.leaves),
            "entries": entries,
        }


def build(addresses: Iterable[AddressLike], dedupe: bool = True) -> MerkleTree:
    normalized = [normalize(a) for a in addresses]
    if dedupe:
        normalized = list(dict.fromkeys(normalized))
    tree = MerkleTree([(a, leaf_hash(a)) for a in normalized])
    logger.info("Built merkle tree: %d leaves, depth %d, root %s",
                len(tree), tree.depth, format_hash(tree.root))
    return tree


def load_tree(data: Dict[str, Any]) -> MerkleTree:
    """Rebuild a tree from `MerkleTree.dump()` output and check it against the stored root."""
    if not isinstance(data, dict) or data.get("format") != DUMP_FORMAT:
        fmt = data.get("format") if isinstance(data, dict) else None
        raise ValueError(f"Unknown merkle dump format: {fmt!r}")
    try:
        addresses = [e["address"] for e in data["entries"]]
        stored_root = data["root"]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed merkle dump: missing {e}")
    tree = build(addresses, dedupe=False)
    if tree.root != parse_root(stored_root):
        raise ValueError(
            f"Merkle dump root mismatch: stored {stored_root}, rebuilt {format_hash(tree.root)}"
        )
    return tree
