"""Hash functions and the fixed-size Hash and Address byte types."""

from __future__ import annotations

import hashlib
import json

from Crypto.Hash import keccak

from yuchain.hexbytes import from_hex, has_hex_prefix, is_hex

HASH_LEN = 32
ADDRESS_LEN = 20

_HEX_CHARS = frozenset("0123456789abcdefABCDEF")


def keccak256(*args: bytes) -> bytes:
    """Return the legacy Keccak-256 digest of the concatenated inputs."""
    digest = keccak.new(digest_bits=256)
    for chunk in args:
        digest.update(bytes(chunk))
    return digest.digest()


def keccak256_hash(*args: bytes) -> "Hash":
    """Return the Keccak-256 digest of the inputs as a Hash."""
    return Hash(keccak256(*args))


def sha256(*args: bytes) -> bytes:
    """Return the SHA-256 digest of the concatenated inputs."""
    digest = hashlib.sha256()
    for chunk in args:
        digest.update(bytes(chunk))
    return digest.digest()


def is_hex_address(s: str) -> bool:
    """Tell whether ``s`` is a hex-encoded address, with or without ``0x``."""
    if has_hex_prefix(s):
        s = s[2:]
    return len(s) == 2 * ADDRESS_LEN and is_hex(s)


def _as_str(text: str | bytes) -> str:
    return text.decode("ascii", errors="replace") if isinstance(text, (bytes, bytearray)) else text


def _decode_fixed_text(name: str, text: str | bytes, length: int, want_prefix: bool) -> bytes:
    text = _as_str(text)
    if text:
        if has_hex_prefix(text):
            text = text[2:]
        elif want_prefix:
            raise ValueError("hex string without 0x prefix")
        if len(text) % 2 != 0:
            raise ValueError("hex string of odd length")
    if len(text) // 2 != length:
        raise ValueError(f"hex string has length {len(text)}, want {length * 2} for {name}")
    if not all(c in _HEX_CHARS for c in text):
        raise ValueError("invalid hex string")
    return bytes.fromhex(text)


class _FixedBytes(bytes):
    """Immutable byte string of a fixed length, cropped or padded on the left."""

    LENGTH = 0

    def __new__(cls, data: bytes = b""):
        data = bytes(data)
        if len(data) > cls.LENGTH:
            data = data[len(data) - cls.LENGTH:]
        return super().__new__(cls, data.rjust(cls.LENGTH, b"\x00"))

    @classmethod
    def from_hex(cls, s: str):
        """Build from a hex string; ``0x`` is optional and bad input decodes leniently."""
        return cls(from_hex(s))

    @classmethod
    def from_int(cls, value: int):
        """Build from the big-endian bytes of the absolute value of ``value``."""
        magnitude = abs(value)
        return cls(magnitude.to_bytes((magnitude.bit_length() + 7) // 8, "big"))

    @classmethod
    def from_text(cls, text: str | bytes):
        """Parse strict ``0x``-prefixed hex of exactly the right length."""
        return cls(_decode_fixed_text(cls.__name__, text, cls.LENGTH, True))

    @classmethod
    def from_unprefixed_text(cls, text: str | bytes):
        """Parse hex of exactly the right length; the ``0x`` prefix is optional."""
        return cls(_decode_fixed_text("Unprefixed" + cls.__name__, text, cls.LENGTH, False))

    def to_int(self) -> int:
        """Interpret the bytes as a big-endian unsigned integer."""
        return int.from_bytes(self, "big")

    def unprefixed_hex(self) -> str:
        """Return lower-case hex without a prefix."""
        return bytes.hex(self)

    def hex(self) -> str:  # type: ignore[override]
        """Return lower-case hex prefixed with ``0x``."""
        return "0x" + bytes.hex(self)

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.hex()!r})"


class Hash(_FixedBytes):
    """A 32-byte hash."""

    LENGTH = HASH_LEN

    def __new__(cls, data: bytes = b""):
        return super().__new__(cls, data)

    @classmethod
    def from_hex(cls, s: str) -> "Hash":
        return super().from_hex(s)

    @classmethod
    def from_int(cls, value: int) -> "Hash":
        return super().from_int(value)

    @classmethod
    def from_text(cls, text: str | bytes) -> "Hash":
        return super().from_text(text)

    @classmethod
    def from_unprefixed_text(cls, text: str | bytes) -> "Hash":
        return super().from_unprefixed_text(text)

    def to_int(self) -> int:
        return super().to_int()

    def hex(self) -> str:  # type: ignore[override]
        return super().hex()

    def unprefixed_hex(self) -> str:
        return super().unprefixed_hex()

    def terminal_string(self) -> str:
        """Return a shortened form for console output."""
        return f"{bytes.hex(self[:3])}…{bytes.hex(self[29:])}"

    def __str__(self) -> str:
        return self.hex()


class Address(_FixedBytes):
    """A 20-byte account address."""

    LENGTH = ADDRESS_LEN

    def __new__(cls, data: bytes = b""):
        return super().__new__(cls, data)

    @classmethod
    def from_hex(cls, s: str) -> "Address":
        return super().from_hex(s)

    @classmethod
    def from_int(cls, value: int) -> "Address":
        return super().from_int(value)

    @classmethod
    def from_text(cls, text: str | bytes) -> "Address":
        return super().from_text(text)

    @classmethod
    def from_unprefixed_text(cls, text: str | bytes) -> "Address":
        return super().from_unprefixed_text(text)

    def to_hash(self) -> Hash:
        """Left-pad the address with zeros into a Hash."""
        return Hash(self)

    def hex(self) -> str:  # type: ignore[override]
        """Return the EIP-55 checksummed hex form."""
        lower = bytes.hex(self)
        digest = keccak256(lower.encode("ascii")).hex()
        return "0x" + "".join(
            c.upper() if c.isalpha() and int(d, 16) > 7 else c
            for c, d in zip(lower, digest)
        )

    def unprefixed_hex(self) -> str:
        return super().unprefixed_hex()

    def __str__(self) -> str:
        return self.hex()


NULL_HASH = Hash()
NULL_ADDRESS = Address()


class MixedcaseAddress:
    """An address together with the original, possibly checksummed, string."""

    def __init__(self, address: Address, original: str) -> None:
        self.address = Address(address)
        self.original = original

    @classmethod
    def from_address(cls, address: Address) -> "MixedcaseAddress":
        return cls(address, Address(address).hex())

    @classmethod
    def from_string(cls, hexaddr: str) -> "MixedcaseAddress":
        if not is_hex_address(hexaddr):
            raise ValueError("Invalid address")
        return cls(Address(from_hex(hexaddr)), hexaddr)

    @classmethod
    def from_json(cls, text: str | bytes) -> "MixedcaseAddress":
        value = json.loads(text)
        if not isinstance(value, str):
            raise ValueError("json: cannot unmarshal non-string into Address")
        return cls(Address.from_text(value), value)

    def to_json(self) -> str:
        body = self.original[2:] if has_hex_prefix(self.original) else self.original
        return json.dumps(f"0x{body}")

    def valid_checksum(self) -> bool:
        return self.original == self.address.hex()

    def __str__(self) -> str:
        state = "ok" if self.valid_checksum() else "INVALID"
        return f"{self.original} [chksum {state}]"

    def __repr__(self) -> str:
        return f"MixedcaseAddress({self.address!r}, {self.original!r})"