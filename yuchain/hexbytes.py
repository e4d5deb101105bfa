"""Helpers for converting between bytes and hexadecimal strings."""

from __future__ import annotations

import re
from collections.abc import Iterable

_HEX_PAIRS = re.compile(r"(?:[0-9a-fA-F]{2})*")
_HEX_CHARS = frozenset("0123456789abcdefABCDEF")


def to_hex(data: bytes) -> str:
    """Return the hex representation of ``data`` prefixed with ``0x``."""
    return "0x" + bytes(data).hex()


def to_hex_array(items: Iterable[bytes]) -> list[str]:
    """Return the ``0x``-prefixed hex representation of every item."""
    return [to_hex(item) for item in items]


def has_hex_prefix(s: str) -> bool:
    """Tell whether ``s`` begins with ``0x`` or ``0X``."""
    return len(s) >= 2 and s[0] == "0" and s[1] in "xX"


def is_hex(s: str) -> bool:
    """Tell whether ``s`` is an even-length string of hex digits."""
    return len(s) % 2 == 0 and all(c in _HEX_CHARS for c in s)


def bytes_to_hex(data: bytes) -> str:
    """Return the plain hex encoding of ``data`` without a prefix."""
    return bytes(data).hex()


def hex_to_bytes(s: str) -> bytes:
    """Decode ``s`` as hex, keeping the bytes decoded before any invalid pair."""
    return bytes.fromhex(_HEX_PAIRS.match(s).group())


def from_hex(s: str) -> bytes:
    """Decode ``s`` as hex; a ``0x`` prefix is optional and odd lengths are left-padded."""
    if has_hex_prefix(s):
        s = s[2:]
    if len(s) % 2 == 1:
        s = "0" + s
    return hex_to_bytes(s)


def hex_to_bytes_fixed(s: str, length: int) -> bytes:
    """Decode ``s`` into exactly ``length`` bytes, cropping or padding on the left."""
    decoded = hex_to_bytes(s)
    if len(decoded) >= length:
        return decoded[len(decoded) - length:]
    return decoded.rjust(length, b"\x00")


def right_pad_bytes(data: bytes, length: int) -> bytes:
    """Zero-pad ``data`` on the right up to ``length``."""
    if length <= len(data):
        return data
    return bytes(data).ljust(length, b"\x00")


def left_pad_bytes(data: bytes, length: int) -> bytes:
    """Zero-pad ``data`` on the left up to ``length``."""
    if length <= len(data):
        return data
    return bytes(data).rjust(length, b"\x00")