"""Public and private keys used to sign transactions and blocks."""

from __future__ import annotations

import enum
import secrets as _random
from abc import ABC, abstractmethod

from Crypto.Hash import RIPEMD160
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
    encode_dss_signature,
)

from yuchain.errors import NO_KEY_TYPE, YuError
from yuchain.hashing import NULL_ADDRESS, Address, sha256
from yuchain.hexbytes import from_hex, to_hex

KEY_TYPE_BYTES_LEN = 1

SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_SECP256K1_HALF_ORDER = SECP256K1_ORDER >> 1

ED25519_PUBKEY_LEN = 32
ED25519_SIGNATURE_LEN = 64
SECP256K1_PUBKEY_LEN = 33
SECP256K1_SIGNATURE_LEN = 64


class KeyType(enum.StrEnum):
    """Names of the supported key algorithms."""

    SECRET_FREE = "secret-free"
    SR25519 = "sr25519"
    ED25519 = "ed25519"
    SECP256K1 = "secp256k1"

    @property
    def index(self) -> str:
        """The one-character tag written before a key's bytes."""
        return _TYPE_INDEX[self]


_TYPE_INDEX = {
    KeyType.SECRET_FREE: "0",
    KeyType.SR25519: "1",
    KeyType.ED25519: "2",
    KeyType.SECP256K1: "3",
}


def _unsupported(key_type: str) -> YuError:
    return YuError(f"key type {key_type} is not supported")


class Key(ABC):
    """A key that can be rendered as bytes, with or without its type tag."""

    _type_index: str = ""

    @abstractmethod
    def type(self) -> str:
        """The name of the key algorithm."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """The raw key bytes."""

    def bytes_with_type(self) -> bytes:
        """The type tag followed by the raw key bytes."""
        return self._type_index.encode("ascii") + self.to_bytes()

    def string_with_type(self) -> str:
        return to_hex(self.bytes_with_type())

    def __str__(self) -> str:
        return to_hex(self.to_bytes())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return other.__class__ is self.__class__ and other.to_bytes() == self.to_bytes()

    def __hash__(self) -> int:
        return hash((self.__class__, self.to_bytes()))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self})"


class PubKey(Key):
    """A public key: derives an address and checks signatures."""

    @abstractmethod
    def address(self) -> Address:
        """The account address derived from this key."""

    @abstractmethod
    def verify_signature(self, msg: bytes, sig: bytes) -> bool:
        """Tell whether ``sig`` is a valid signature of ``msg``."""


class PrivKey(Key):
    """A private key: signs data."""

    @abstractmethod
    def sign_data(self, data: bytes) -> bytes:
        """Sign ``data`` and return the signature."""


class FreePubkey(PubKey):
    """The public half of a secret-free pair; accepts every signature."""

    _type_index = _TYPE_INDEX[KeyType.SECRET_FREE]

    def type(self) -> str:
        return KeyType.SECRET_FREE.value

    def to_bytes(self) -> bytes:
        return b""

    def address(self) -> Address:
        return NULL_ADDRESS

    def verify_signature(self, msg: bytes, sig: bytes) -> bool:
        return True


class FreePrivkey(PrivKey):
    """The private half of a secret-free pair; signs with an empty signature."""

    _type_index = _TYPE_INDEX[KeyType.SECRET_FREE]

    def type(self) -> str:
        return KeyType.SECRET_FREE.value

    def to_bytes(self) -> bytes:
        return b""

    def sign_data(self, data: bytes) -> bytes:
        return b""


class EdPubkey(PubKey):
    """An Ed25519 public key."""

    _type_index = _TYPE_INDEX[KeyType.ED25519]

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    def type(self) -> str:
        return KeyType.ED25519.value

    def to_bytes(self) -> bytes:
        return self._data

    def address(self) -> Address:
        """The first 20 bytes of the SHA-256 of the key."""
        if len(self._data) != ED25519_PUBKEY_LEN:
            raise ValueError("pubkey is incorrect size")
        return Address(sha256(self._data)[:20])

    def verify_signature(self, msg: bytes, sig: bytes) -> bool:
        if len(sig) != ED25519_SIGNATURE_LEN:
            return False
        try:
            key = ed25519.Ed25519PublicKey.from_public_bytes(self._data)
            key.verify(bytes(sig), bytes(msg))
        except (InvalidSignature, ValueError):
            return False
        return True


class EdPrivkey(PrivKey):
    """An Ed25519 private key, stored as its 32-byte seed plus the public key."""

    _type_index = _TYPE_INDEX[KeyType.ED25519]

    def __init__(self, seed: bytes) -> None:
        seed = bytes(seed)
        if len(seed) == 2 * ED25519_PUBKEY_LEN:
            seed = seed[:ED25519_PUBKEY_LEN]
        if len(seed) != ED25519_PUBKEY_LEN:
            raise ValueError("ed25519 private key needs a 32-byte seed")
        self._seed = seed
        self._key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
        self._public = self._key.public_key().public_bytes(
            serialization.Encoding.Raw, serialization.PublicFormat.Raw
        )

    def type(self) -> str:
        return KeyType.ED25519.value

    def to_bytes(self) -> bytes:
        return self._seed + self._public

    def public_key(self) -> EdPubkey:
        return EdPubkey(self._public)

    def sign_data(self, data: bytes) -> bytes:
        return self._key.sign(bytes(data))


class SecpPubkey(PubKey):
    """A compressed secp256k1 public key."""

    # Tagged with index "1" on the wire, the same tag sr25519 keys use.
    _type_index = _TYPE_INDEX[KeyType.SR25519]

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    def type(self) -> str:
        return KeyType.SECP256K1.value

    def to_bytes(self) -> bytes:
        return self._data

    def address(self) -> Address:
        """RIPEMD-160 of the SHA-256 of the key."""
        if len(self._data) != SECP256K1_PUBKEY_LEN:
            raise ValueError("pubkey is incorrect size")
        return Address(RIPEMD160.new(sha256(self._data)).digest())

    def verify_signature(self, msg: bytes, sig: bytes) -> bool:
        """Check an ``r || s`` signature of SHA-256(msg); high-S forms are rejected."""
        if len(sig) != SECP256K1_SIGNATURE_LEN:
            return False
        r = int.from_bytes(sig[:32], "big")
        s = int.from_bytes(sig[32:], "big")
        if s > _SECP256K1_HALF_ORDER:
            return False
        try:
            key = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), self._data)
            key.verify(
                encode_dss_signature(r, s),
                sha256(bytes(msg)),
                ec.ECDSA(Prehashed(hashes.SHA256())),
            )
        except (InvalidSignature, ValueError):
            return False
        return True


class SecpPrivkey(PrivKey):
    """A 32-byte secp256k1 private key."""

    _type_index = _TYPE_INDEX[KeyType.SR25519]

    def __init__(self, data: bytes) -> None:
        data = bytes(data)
        if len(data) != 32:
            raise ValueError("secp256k1 private key must be 32 bytes")
        scalar = int.from_bytes(data, "big")
        if not 0 < scalar < SECP256K1_ORDER:
            raise ValueError("secp256k1 private key out of range")
        self._data = data
        self._key = ec.derive_private_key(scalar, ec.SECP256K1())

    def type(self) -> str:
        return KeyType.SECP256K1.value

    def to_bytes(self) -> bytes:
        return self._data

    def public_key(self) -> SecpPubkey:
        return SecpPubkey(
            self._key.public_key().public_bytes(
                serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
            )
        )

    def sign_data(self, data: bytes) -> bytes:
        """Sign SHA-256(data); the result is ``r || s`` with a low S."""
        der = self._key.sign(sha256(bytes(data)), ec.ECDSA(Prehashed(hashes.SHA256())))
        r, s = decode_dss_signature(der)
        if s > _SECP256K1_HALF_ORDER:
            s = SECP256K1_ORDER - s
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")


def gen_ed_key_with_secret(secret: bytes) -> tuple[EdPubkey, EdPrivkey]:
    """Derive an Ed25519 pair whose seed is SHA-256(secret)."""
    priv = EdPrivkey(sha256(bytes(secret)))
    return priv.public_key(), priv


def gen_ed_key() -> tuple[EdPubkey, EdPrivkey]:
    """Generate a random Ed25519 pair."""
    priv = EdPrivkey(_random.token_bytes(32))
    return priv.public_key(), priv


def gen_secp_key_with_secret(secret: bytes) -> tuple[SecpPubkey, SecpPrivkey]:
    """Derive a secp256k1 pair from SHA-256(secret), reduced into the curve order."""
    digest = int.from_bytes(sha256(bytes(secret)), "big")
    scalar = digest % (SECP256K1_ORDER - 1) + 1
    priv = SecpPrivkey(scalar.to_bytes(32, "big"))
    return priv.public_key(), priv


def gen_secp_key() -> tuple[SecpPubkey, SecpPrivkey]:
    """Generate a random secp256k1 pair."""
    while True:
        candidate = _random.token_bytes(32)
        if 0 < int.from_bytes(candidate, "big") < SECP256K1_ORDER:
            priv = SecpPrivkey(candidate)
            return priv.public_key(), priv


def gen_key_pair_with_secret(key_type: str, secret: bytes) -> tuple[PubKey, PrivKey]:
    """Derive a pair of the given type from ``secret``."""
    match key_type:
        case KeyType.SECRET_FREE:
            return FreePubkey(), FreePrivkey()
        case KeyType.ED25519:
            return gen_ed_key_with_secret(secret)
        case KeyType.SECP256K1:
            return gen_secp_key_with_secret(secret)
        case KeyType.SR25519:
            raise _unsupported(key_type)
        case _:
            raise NO_KEY_TYPE


def gen_key_pair(key_type: str) -> tuple[PubKey, PrivKey]:
    """Generate a random pair of the given type."""
    match key_type:
        case KeyType.SECRET_FREE:
            return FreePubkey(), FreePrivkey()
        case KeyType.ED25519:
            return gen_ed_key()
        case KeyType.SECP256K1:
            return gen_secp_key()
        case KeyType.SR25519:
            raise _unsupported(key_type)
        case _:
            raise NO_KEY_TYPE


def pubkey_from_bytes(data: bytes) -> PubKey:
    """Decode a public key from its type tag followed by its bytes."""
    data = bytes(data)
    if len(data) < KEY_TYPE_BYTES_LEN:
        raise YuError("null data")
    tag = data[:KEY_TYPE_BYTES_LEN].decode("latin-1")
    body = data[KEY_TYPE_BYTES_LEN:]
    match tag:
        case "0":
            return FreePubkey()
        case "1":
            raise _unsupported(KeyType.SR25519)
        case "2":
            return EdPubkey(body)
        case "3":
            return SecpPubkey(body)
        case _:
            raise NO_KEY_TYPE


def pubkey_from_str(data: str) -> PubKey:
    """Decode a public key from the hex of its tagged bytes."""
    return pubkey_from_bytes(from_hex(data))