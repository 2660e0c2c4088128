"""
Command-line entry point.

Usage:
    python -m merkle_airdrop build whitelist.txt [--out merkle_data.json] [--solidity]
    python -m merkle_airdrop proof merkle_data.json 0x70997970C51812dc3A010C7d01b50e0d17dc79C8
    python -m merkle_airdrop verify <root> <address> [proof ...]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from merkle_airdrop.config import load_config
from merkle_airdrop.errors import AirdropError, LeafNotFound
from merkle_airdrop.leaf import leaf_hash, to_checksum
from merkle_airdrop.tree import MerkleTree, build, load_tree
from merkle_airdrop.verify import format_hash, parse_proof, parse_root, verify_proof

EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def read_whitelist(path: Path) -> List[str]:
    text = path.read_text()
    if text.lstrip().startswith("["):
        return [str(a) for a in json.loads(text)]
    addrs = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            addrs.append(line)
    return addrs


def print_solidity(addr: str, proof_hex: Sequence[str]) -> None:
    name = addr.replace("0x", "").upper()
    print("\n// Solidity")
    print(f"PROOF_{name} = new bytes32[]({len(proof_hex)});")
    for i, p in enumerate(proof_hex):
        print(f"PROOF_{name}[{i}] = {p};")


def cmd_build(args) -> int:
    tree = build(read_whitelist(args.whitelist))
    data = tree.dump()
    print(f"Merkle Root: {data['root']}")
    for entry in data["entries"]:
        print(f"\nAddress {entry['address']}")
        print("Proof:", "[" + ", ".join(entry["proof"]) + "]")
        if args.solidity:
            print_solidity(entry["address"], entry["proof"])

    out = Path(args.out)
    out.write_text(json.dumps(data, indent=2))
    print(f"\nData saved to: {out}")
    return EXIT_SUCCESS


def cmd_proof(args) -> int:
    tree: MerkleTree = load_tree(json.loads(Path(args.dump).read_text()))
    try:
        pf = tree.proof_for(args.address)
    except LeafNotFound:
        print(f"Address {args.address} is NOT in the whitelist.")
        return EXIT_VERIFICATION_FAILED
    proof_hex = [format_hash(p) for p in pf]
    if args.json:
        print(json.dumps({"address": to_checksum(args.address), "proof": proof_hex}))
    else:
        print("Proof:", "[" + ", ".join(proof_hex) + "]")
    return EXIT_SUCCESS


def cmd_verify(args) -> int:
    root = parse_root(args.root)
    ok = verify_proof(leaf_hash(args.address), parse_proof(args.proof), root)
    print(f"Address {to_checksum(args.address)} is whitelisted: {ok}")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED


def create_parser(default_output: str = "merkle_data.json") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="merkle-airdrop",
        description="Build whitelist merkle roots and proofs, and verify claims against a root.",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default: AIRDROP_LOG_LEVEL or INFO)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_build = sub.add_parser("build", help="Build the merkle tree for a whitelist file")
    p_build.add_argument("whitelist", type=Path, help="One address per line, or a JSON list")
    p_build.add_argument("--out", "-o", default=default_output, help=f"Output JSON (default: {default_output})")
    p_build.add_argument("--solidity", action="store_true", help="Print bytes32[] proof snippets")
    p_build.set_defaults(func=cmd_build)

    p_proof = sub.add_parser("proof", help="Look up the proof for one address")
    p_proof.add_argument("dump", type=Path, help="JSON produced by `build`")
    p_proof.add_argument("address")
    p_proof.add_argument("--json", action="store_true", help="Print the proof as JSON")
    p_proof.set_defaults(func=cmd_proof)

    p_verify = sub.add_parser("verify", help="Verify an address against a root")
    p_verify.add_argument("root")
    p_verify.add_argument("address")
    p_verify.add_argument("proof", nargs="*", default=[])
    p_verify.set_defaults(func=cmd_verify)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = load_config()
    args = create_parser(config.output).parse_args(argv)
    setup_logging(args.log_level or config.log_level)
    try:
        return args.func(args)
    except (AirdropError, ValueError, OSError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
