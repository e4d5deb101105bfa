"""Core chain types: block numbers, block ids, calls and topic names."""

from __future__ import annotations

import enum
import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from yuchain.hashing import HASH_LEN, Hash, sha256
from yuchain.hexbytes import to_hex

START_BLOCK_TOPIC = "start-block"
END_BLOCK_TOPIC = "end-block"
FINALIZE_BLOCK_TOPIC = "finalize-block"
UNPACKED_TXNS_TOPIC = "unpacked-txns"

BLOCK_NUM_LEN = 4
BLOCK_ID_LEN = BLOCK_NUM_LEN + HASH_LEN
SEPARATOR = "|"

_MAX_BLOCK_NUM = 2**32 - 1
_MAX_UINT64 = 2**64 - 1

_GO_ESCAPES = str.maketrans(
    {
        "<": "\\u003c",
        ">": "\\u003e",
        "&": "\\u0026",
        "\u2028": "\\u2028",
        "\u2029": "\\u2029",
    }
)


class RunMode(enum.IntEnum):
    """How the node runs."""

    LOCAL_NODE = 0
    MASTER_WORKER = 1


class NodeType(enum.IntEnum):
    """What kind of history the node keeps."""

    FULL_NODE = 0
    LIGHT_NODE = 1
    ARCHIVE_NODE = 2


class BlockStage(enum.StrEnum):
    """The stage of the block cycle a receipt was produced in."""

    START_BLOCK = "Start Block"
    EXECUTE_TXNS = "Execute Txns"
    END_BLOCK = "End Block"
    FINALIZE_BLOCK = "Finalize Block"


class JsonNumber(str):
    """A JSON number kept as its original literal text."""

    def __repr__(self) -> str:
        return f"JsonNumber({str.__repr__(self)})"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name!r}")


_DECODER = json.JSONDecoder(
    parse_int=JsonNumber,
    parse_float=JsonNumber,
    parse_constant=_reject_constant,
)


def bind_json_params(params: str) -> Any:
    """Decode the first JSON value in ``params``, keeping numbers as JsonNumber."""
    text = params.lstrip(" \t\r\n")
    if not text:
        raise ValueError("EOF")
    value, _ = _DECODER.raw_decode(text)
    return value


def _go_json(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return text.translate(_GO_ESCAPES)


def _require_mapping(data: Any, name: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ValueError(f"cannot decode {type(data).__name__} into {name}")
    return data


def _str_field(data: Mapping, key: str, default: str = "") -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


def _uint_field(data: Mapping, key: str, default: int = 0) -> int:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_UINT64:
        raise ValueError(f"field {key!r} must be an unsigned 64-bit integer")
    return value


@dataclass
class WrCall:
    """A writing call from a client."""

    chain_id: int = 0
    tripod_name: str = ""
    func_name: str = ""
    params: str = ""
    lei_price: int = 0
    tips: int = 0

    def to_json(self) -> str:
        """Encode as compact JSON; zero ``lei_price`` and ``tips`` are omitted."""
        body: dict[str, Any] = {
            "chain_id": self.chain_id,
            "tripod_name": self.tripod_name,
            "func_name": self.func_name,
            "params": self.params,
        }
        if self.lei_price:
            body["lei_price"] = self.lei_price
        if self.tips:
            body["tips"] = self.tips
        return _go_json(body)

    @classmethod
    def from_dict(cls, data: Mapping) -> "WrCall":
        data = _require_mapping(data, "WrCall")
        return cls(
            chain_id=_uint_field(data, "chain_id"),
            tripod_name=_str_field(data, "tripod_name"),
            func_name=_str_field(data, "func_name"),
            params=_str_field(data, "params"),
            lei_price=_uint_field(data, "lei_price"),
            tips=_uint_field(data, "tips"),
        )

    def hash(self) -> bytes:
        """Return the SHA-256 digest of the JSON encoding."""
        return sha256(self.to_json().encode("utf-8"))

    def bind_json_params(self) -> Any:
        """Decode the call's JSON params."""
        return bind_json_params(self.params)


@dataclass
class RdCall:
    """A reading call from a client."""

    tripod_name: str = ""
    func_name: str = ""
    params: str = ""
    block_hash: str = ""

    @classmethod
    def from_dict(cls, data: Mapping) -> "RdCall":
        data = _require_mapping(data, "RdCall")
        return cls(
            tripod_name=_str_field(data, "tripod_name"),
            func_name=_str_field(data, "func_name"),
            params=_str_field(data, "params"),
            block_hash=_str_field(data, "block_hash"),
        )


def block_num_to_bytes(num: int) -> bytes:
    """Encode a block number as 4 big-endian bytes."""
    if not 0 <= num <= _MAX_BLOCK_NUM:
        raise ValueError(f"block number {num} out of range")
    return num.to_bytes(BLOCK_NUM_LEN, "big")


def bytes_to_block_num(data: bytes) -> int:
    """Decode a block number from the first 4 big-endian bytes of ``data``."""
    if len(data) < BLOCK_NUM_LEN:
        raise ValueError(f"need {BLOCK_NUM_LEN} bytes for a block number, got {len(data)}")
    return int.from_bytes(data[:BLOCK_NUM_LEN], "big")


def str_to_block_num(s: str) -> int:
    """Parse a decimal block number; values above 32 bits wrap around."""
    if not s or not s.isascii() or not s.isdigit():
        raise ValueError(f'strconv.ParseUint: parsing "{s}": invalid syntax')
    value = int(s)
    if value > _MAX_UINT64:
        raise ValueError(f'strconv.ParseUint: parsing "{s}": value out of range')
    return value & _MAX_BLOCK_NUM


class BlockId(bytes):
    """A 40-byte key: the block number followed by the block hash."""

    def __new__(cls, data: bytes = bytes(BLOCK_ID_LEN)):
        data = bytes(data)
        if len(data) != BLOCK_ID_LEN:
            raise ValueError(f"block id must be {BLOCK_ID_LEN} bytes, got {len(data)}")
        return super().__new__(cls, data)

    @classmethod
    def new(cls, num: int, block_hash: bytes) -> "BlockId":
        return cls(block_num_to_bytes(num) + bytes(Hash(block_hash)))

    @classmethod
    def decode(cls, data: bytes) -> "BlockId":
        """Take the first 40 bytes of ``data``, zero-padding on the right."""
        return cls(bytes(data[:BLOCK_ID_LEN]).ljust(BLOCK_ID_LEN, b"\x00"))

    def separate(self) -> tuple[int, Hash]:
        """Split into the block number and the block hash."""
        return bytes_to_block_num(self[:BLOCK_NUM_LEN]), Hash(self[BLOCK_NUM_LEN:])

    def __repr__(self) -> str:
        return f"BlockId({bytes.hex(self)!r})"


def hashes_to_hex(hashes: Iterable[bytes]) -> str:
    """Join hashes as ``0x``-hex strings separated by ``|``."""
    return SEPARATOR.join(to_hex(h) for h in hashes)


def hex_to_hashes(s: str) -> list[Hash]:
    """Split a ``|``-separated hex string into hashes."""
    return [Hash.from_hex(part) for part in s.split(SEPARATOR)]


def hashes_to_bytes(hashes: Iterable[bytes]) -> bytes:
    return hashes_to_hex(hashes).encode("ascii")


def bytes_to_hashes(data: bytes) -> list[Hash]:
    return hex_to_hashes(bytes(data).decode("ascii", errors="replace"))