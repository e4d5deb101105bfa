"""The HTTP API surface: paths, response envelopes and request bodies."""

from __future__ import annotations

import enum
import json
import posixpath
from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from yuchain.errors import YuError
from yuchain.hexbytes import has_hex_prefix, is_hex
from yuchain.types import RdCall, WrCall

ROOT_API_PATH = "/api"
WR_CALL_TYPE = "writing"
RD_CALL_TYPE = "reading"
ADMIN_TYPE = "admin"

TRIPOD_NAME_KEY = "tripod_name"
FUNC_NAME_KEY = "func_name"
BLOCK_HASH_KEY = "block_hash"

WR_API_PATH = posixpath.join(ROOT_API_PATH, WR_CALL_TYPE)
RD_API_PATH = posixpath.join(ROOT_API_PATH, RD_CALL_TYPE)
ADMIN_API_PATH = posixpath.join(ROOT_API_PATH, ADMIN_TYPE)
SUB_RESULTS_PATH = "/subscribe/results"

# API envelopes are always served with this HTTP status; the outcome is in the code.
API_HTTP_STATUS = HTTPStatus.OK

_VERSION = "alpha-v1.0"


def version() -> str:
    """The kernel version string."""
    return _VERSION


class ResultCode(enum.IntEnum):
    SUCCESS = 0
    BLOCK_FAILURE = 10001
    TXN_FAILURE = 10002
    RECEIPT_FAILURE = 10003


@dataclass
class APIResponse:
    """The JSON envelope every API call answers with."""

    code: int
    err_msg: str = ""
    data: Any = None

    def is_success(self) -> bool:
        return self.code == ResultCode.SUCCESS

    def error(self) -> YuError:
        """The error message as an exception."""
        return YuError(self.err_msg)

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "err_msg": self.err_msg, "data": self.data}


def render_json(code: int, error: BaseException | None, data: Any) -> APIResponse:
    return APIResponse(
        code=int(code),
        err_msg="" if error is None else str(error),
        data=data,
    )


def render_success(data: Any) -> APIResponse:
    return render_json(ResultCode.SUCCESS, None, data)


def render_error(code: int, error: BaseException | None) -> APIResponse:
    return render_json(code, error, None)


@dataclass
class SignedWrCall:
    """A writing call with the caller's public key, address and signature."""

    pubkey: bytes = b""
    address: bytes = b""
    signature: bytes = b""
    call: WrCall | None = None

    def tripod(self) -> str:
        return self.call.tripod_name

    def func_name(self) -> str:
        return self.call.func_name


def _load_body(body: str | bytes | Mapping) -> Mapping:
    if isinstance(body, Mapping):
        return body
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8")
    if not body.strip():
        raise ValueError("EOF")
    value = json.loads(body)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"json: cannot unmarshal {type(value).__name__} into request body")
    return value


def _decode_prefixed_hex(key: str, value: Any) -> bytes:
    if value is None or value == "":
        return b""
    if not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a hex string")
    if not has_hex_prefix(value):
        raise ValueError("hex string without 0x prefix")
    digits = value[2:]
    if len(digits) % 2:
        raise ValueError("hex string of odd length")
    if not is_hex(digits):
        raise ValueError("invalid hex string")
    return bytes.fromhex(digits)


def parse_signed_wr_call(body: str | bytes | Mapping) -> SignedWrCall:
    """Parse a writing POST body whose key fields are ``0x``-prefixed hex."""
    data = _load_body(body)
    call_data = data.get("call")
    return SignedWrCall(
        pubkey=_decode_prefixed_hex("pubkey", data.get("pubkey")),
        address=_decode_prefixed_hex("address", data.get("address")),
        signature=_decode_prefixed_hex("signature", data.get("signature")),
        call=None if call_data is None else WrCall.from_dict(call_data),
    )


def parse_rd_call(body: str | bytes | Mapping) -> RdCall:
    """Parse a reading POST body."""
    return RdCall.from_dict(_load_body(body))