"""Messages exchanged when nodes hand-shake and sync history or transactions."""

from __future__ import annotations

import base64
import binascii
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from yuchain.errors import GENESIS_BLOCK_ILLEGAL, YuError
from yuchain.hashing import NULL_HASH, Hash

HANDSHAKE_CODE = 100
SYNC_TXNS_CODE = 101

_MAX_BLOCK_NUM = 2**32 - 1
_DECODER = json.JSONDecoder()


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def _load_object(data: bytes | str) -> Mapping:
    """Decode the first JSON value in ``data``; it must be an object or null."""
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    text = data.lstrip(" \t\r\n")
    if not text:
        raise ValueError("EOF")
    value, _ = _DECODER.raw_decode(text)
    return _as_object(value, "message")


def _as_object(value: Any, name: str) -> Mapping:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"json: cannot unmarshal {type(value).__name__} into {name}")
    return value


def _block_num(data: Mapping, key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= _MAX_BLOCK_NUM:
        raise ValueError(f"field {key!r} must be a 32-bit block number")
    return value


def _hash(data: Mapping, key: str) -> Hash:
    value = data.get(key)
    if value is None:
        return NULL_HASH
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a hex string")
    return Hash.from_text(value)


@dataclass(frozen=True)
class BlocksRange:
    """An inclusive range of block heights."""

    start_height: int
    end_height: int


def _range_to_json(r: BlocksRange | None) -> dict | None:
    if r is None:
        return None
    return {"StartHeight": r.start_height, "EndHeight": r.end_height}


def _range_from_json(value: Any) -> BlocksRange | None:
    if value is None:
        return None
    data = _as_object(value, "BlocksRange")
    return BlocksRange(_block_num(data, "StartHeight"), _block_num(data, "EndHeight"))


@dataclass
class HandShakeInfo:
    """A node's genesis hash and the tip of its chain."""

    genesis_block_hash: Hash = NULL_HASH
    end_height: int = 0
    end_block_hash: Hash = NULL_HASH

    def compare(self, other: "HandShakeInfo") -> BlocksRange | None:
        """The range ``other`` is missing when it is behind this node, else None."""
        if self.genesis_block_hash != other.genesis_block_hash:
            raise GENESIS_BLOCK_ILLEGAL
        if self.end_height > other.end_height:
            return BlocksRange(other.end_height + 1, self.end_height)
        return None


def _info_to_json(info: HandShakeInfo | None) -> dict | None:
    if info is None:
        return None
    return {
        "GenesisBlockHash": Hash(info.genesis_block_hash).hex(),
        "EndHeight": info.end_height,
        "EndBlockHash": Hash(info.end_block_hash).hex(),
    }


def _info_from_json(value: Any) -> HandShakeInfo | None:
    if value is None:
        return None
    data = _as_object(value, "HandShakeInfo")
    return HandShakeInfo(
        genesis_block_hash=_hash(data, "GenesisBlockHash"),
        end_height=_block_num(data, "EndHeight"),
        end_block_hash=_hash(data, "EndBlockHash"),
    )


@dataclass
class HandShakeRequest:
    """Sent to a peer: our chain info and, optionally, a range of blocks we want."""

    fetch_range: BlocksRange | None = None
    info: HandShakeInfo | None = None

    def encode(self) -> bytes:
        body = {"FetchRange": _range_to_json(self.fetch_range), "Info": _info_to_json(self.info)}
        return (_dumps(body) + "\n").encode("utf-8")

    @classmethod
    def decode(cls, data: bytes | str) -> "HandShakeRequest":
        obj = _load_object(data)
        return cls(
            fetch_range=_range_from_json(obj.get("FetchRange")),
            info=_info_from_json(obj.get("Info")),
        )


@dataclass
class HandShakeResp:
    """A peer's answer: what we are missing, the blocks asked for, or an error."""

    missing_range: BlocksRange | None = None
    blocks_byt: bytes | None = None
    err: BaseException | None = None

    def encode(self) -> bytes:
        body = {
            "MissingRange": _range_to_json(self.missing_range),
            "BlocksByt": None
            if self.blocks_byt is None
            else base64.b64encode(self.blocks_byt).decode("ascii"),
            "Err": None if self.err is None else str(self.err),
        }
        return (_dumps(body) + "\n").encode("utf-8")

    @classmethod
    def decode(cls, data: bytes | str) -> "HandShakeResp":
        obj = _load_object(data)
        raw_blocks = obj.get("BlocksByt")
        if raw_blocks is None:
            blocks = None
        elif isinstance(raw_blocks, str):
            try:
                blocks = base64.b64decode(raw_blocks, validate=True)
            except binascii.Error as exc:
                raise ValueError(f"illegal base64 data: {exc}") from exc
        else:
            raise ValueError("field 'BlocksByt' must be a base64 string")
        raw_err = obj.get("Err")
        if raw_err is None:
            err = None
        elif isinstance(raw_err, str):
            err = YuError(raw_err)
        else:
            raise ValueError("field 'Err' must be a string")
        return cls(
            missing_range=_range_from_json(obj.get("MissingRange")),
            blocks_byt=blocks,
            err=err,
        )


@dataclass
class TxnsRequest:
    """Asks a peer for transactions by hash, naming the block's producer."""

    hashes: list[Hash] = field(default_factory=list)
    block_producer: str = ""

    def encode(self) -> bytes:
        body = {
            "Hashes": [Hash(h).hex() for h in self.hashes],
            "BlockProducer": self.block_producer,
        }
        return _dumps(body).encode("utf-8")

    @classmethod
    def decode(cls, data: bytes | str) -> "TxnsRequest":
        obj = _load_object(data)
        raw_hashes = obj.get("Hashes")
        if raw_hashes is None:
            raw_hashes = []
        if not isinstance(raw_hashes, list):
            raise ValueError("field 'Hashes' must be an array")
        hashes = []
        for item in raw_hashes:
            if not isinstance(item, str):
                raise ValueError("hash must be a hex string")
            hashes.append(Hash.from_text(item))
        producer = obj.get("BlockProducer")
        if producer is None:
            producer = ""
        if not isinstance(producer, str):
            raise ValueError("field 'BlockProducer' must be a string")
        return cls(hashes=hashes, block_producer=producer)