"""Message hashing used for MetaMask personal signatures."""

from __future__ import annotations

from yuchain.hashing import keccak256
from yuchain.hexbytes import to_hex

PREFIX = "\x19Ethereum Signed Message:\n"


def metamask_msg_hash(data: bytes) -> bytes:
    """Return the Keccak-256 of the prefixed, length-tagged hex form of ``data``."""
    hex_text = to_hex(data)
    return keccak256(f"{PREFIX}{len(hex_text)}{hex_text}".encode("utf-8"))