from typing import Union

import base58
from eth_utils import (
    is_checksum_address,
    is_checksum_formatted_address,
    is_hex_address,
    keccak,
    to_checksum_address,
)

from merkle_airdrop.errors import InvalidAddress

AddressLike = Union[str, bytes]

ADDRESS_SIZE = 20
TRON_PREFIX = 0x41


def tron_to_evm_bytes(tron_addr: str) -> bytes:
    """
    Convert Tron Base58Check addr (T...) to the 20 EVM address bytes by stripping leading 0x41.
    """
    try:
        decoded = base58.b58decode_check(tron_addr)
    except ValueError:
        raise InvalidAddress(f"Invalid Tron address: {tron_addr}")
    if len(decoded) != ADDRESS_SIZE + 1 or decoded[0] != TRON_PREFIX:
        raise InvalidAddress(f"Invalid Tron address: {tron_addr}")
    return decoded[1:]


def normalize(addr: AddressLike) -> bytes:
    if isinstance(addr, (bytes, bytearray)):
        if len(addr) != ADDRESS_SIZE:
            raise InvalidAddress(f"Invalid address: expected {ADDRESS_SIZE} bytes, got {len(addr)}")
        return bytes(addr)
    if not isinstance(addr, str):
        raise InvalidAddress(f"Invalid address: {addr!r}")

    addr = addr.strip()
    if addr.startswith("T") and len(addr) == 34:
        return tron_to_evm_bytes(addr)
    if not addr.startswith(("0x", "0X")):
        addr = "0x" + addr
    addr = "0x" + addr[2:]
    if not is_hex_address(addr):
        raise InvalidAddress(f"Invalid address: {addr}")
    # mixed case means the caller supplied an EIP-55 checksum, so it has to hold
    if is_checksum_formatted_address(addr) and not is_checksum_address(addr):
        raise InvalidAddress(f"Invalid address checksum: {addr}")
    return bytes.fromhex(addr[2:])


def to_checksum(addr: AddressLike) -> str:
    return to_checksum_address(normalize(addr))


def abi_encode_address(b20: bytes) -> bytes:
    # abi.encode(address): left padded to one 32 byte word
    return b"\x00" * 12 + b20


def leaf_hash(addr: AddressLike) -> bytes:
    """
    Standard OpenZeppelin leaf for an `["address"]` tree:
    keccak256(bytes.concat(keccak256(abi.encode(addr))))
    """
    b20 = normalize(addr)
    return keccak(keccak(abi_encode_address(b20)))


encode = leaf_hash
