"""Call contexts: parameter access for writings and response state for readings."""

from __future__ import annotations

import json
import math
import re
import struct
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from yuchain.errors import TYPE_ERR
from yuchain.hashing import Address, Hash
from yuchain.types import JsonNumber, RdCall, bind_json_params

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"[0-9]+")
_INT_BITS = (8, 16, 32, 64)
_FLOAT_BITS = (32, 64)


def _syntax_error(func: str, text: str) -> ValueError:
    return ValueError(f'strconv.{func}: parsing "{text}": invalid syntax')


def _range_error(func: str, text: str) -> ValueError:
    return ValueError(f'strconv.{func}: parsing "{text}": value out of range')


def _decode_params(params_str: str) -> dict[str, Any]:
    """Decode a JSON object of parameters; ``null`` gives an empty mapping."""
    value = bind_json_params(params_str)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"json: cannot unmarshal {type(value).__name__} into map")
    return value


def _is_plain_string(value: Any) -> bool:
    return isinstance(value, str) and not isinstance(value, JsonNumber)


class ParamsResponse:
    """JSON call parameters with typed accessors, plus a response buffer."""

    def __init__(self, params_str: str) -> None:
        self.params_str = params_str
        self._params = _decode_params(params_str)
        self._response: bytes | None = None

    def response(self) -> bytes | None:
        """The response set so far, or None."""
        return self._response

    def set_bytes(self, data: bytes) -> None:
        self._response = bytes(data)

    def set_string(self, fmt: str, *args: Any) -> None:
        """Set the response to ``fmt`` formatted with ``args``, as UTF-8."""
        self._response = (fmt % args if args else fmt).encode("utf-8")

    def set_json(self, value: Any) -> None:
        """Set the response to the compact JSON encoding of ``value``."""
        self._response = json.dumps(value, separators=(",", ":")).encode("utf-8")

    def get(self, name: str) -> Any:
        """The raw decoded parameter, or None when absent."""
        return self._params.get(name)

    def get_string(self, name: str) -> str:
        value = self._params.get(name)
        if not _is_plain_string(value):
            raise TYPE_ERR
        return value

    def get_hash(self, name: str) -> Hash:
        return Hash.from_hex(self.get_string(name))

    def get_address(self, name: str) -> Address:
        return Address.from_hex(self.get_string(name))

    def get_bytes(self, name: str) -> bytes:
        return self.get_string(name).encode("utf-8")

    def get_bool(self, name: str) -> bool:
        value = self._params.get(name)
        if not isinstance(value, bool):
            raise TYPE_ERR
        return value

    def _number_text(self, name: str) -> str:
        value = self._params.get(name)
        if not isinstance(value, JsonNumber):
            raise TYPE_ERR
        return str(value)

    def get_int(self, name: str, bits: int = 64) -> int:
        """A signed integer parameter that must fit in ``bits`` bits."""
        if bits not in _INT_BITS:
            raise ValueError(f"unsupported integer size {bits}")
        text = self._number_text(name)
        if not _INT_RE.fullmatch(text):
            raise _syntax_error("ParseInt", text)
        value = int(text)
        if not -(1 << (bits - 1)) <= value < (1 << (bits - 1)):
            raise _range_error("ParseInt", text)
        return value

    def get_uint(self, name: str, bits: int = 64) -> int:
        """An unsigned integer parameter that must fit in ``bits`` bits."""
        if bits not in _INT_BITS:
            raise ValueError(f"unsupported integer size {bits}")
        text = self._number_text(name)
        if not _UINT_RE.fullmatch(text):
            raise _syntax_error("ParseUint", text)
        value = int(text)
        if value >= 1 << bits:
            raise _range_error("ParseUint", text)
        return value

    def get_float(self, name: str, bits: int = 64) -> float:
        """A floating-point parameter, rounded to single precision when ``bits`` is 32."""
        if bits not in _FLOAT_BITS:
            raise ValueError(f"unsupported float size {bits}")
        text = self._number_text(name)
        try:
            value = float(text)
        except ValueError:
            raise _syntax_error("ParseFloat", text) from None
        if bits == 32:
            try:
                value = struct.unpack("<f", struct.pack("<f", value))[0]
            except OverflowError:
                raise _range_error("ParseFloat", text) from None
        if math.isinf(value):
            raise _range_error("ParseFloat", text)
        return value


@dataclass
class ResponseData:
    """What a reading answers with: JSON data or raw bytes with a content type."""

    status_code: int
    data_interface: Any = None
    is_json: bool = False
    content_type: str = ""
    data_bytes: bytes = b""


class ReadContext:
    """The state of one reading call."""

    def __init__(self, rd_call: RdCall) -> None:
        self.rd_call = rd_call
        self.block_hash: Hash | None = (
            Hash.from_hex(rd_call.block_hash) if rd_call.block_hash else None
        )
        self._resp: ResponseData | None = None

    def response(self) -> ResponseData | None:
        return self._resp

    def bind_json(self) -> Any:
        """Decode the call's JSON params."""
        return bind_json_params(self.rd_call.params)

    def get_param(self, key: str) -> Any:
        return _decode_params(self.rd_call.params).get(key)

    def get_string(self, key: str) -> str:
        value = self.get_param(key)
        if not _is_plain_string(value):
            raise TYPE_ERR
        return value

    def json(self, code: int, value: Any) -> None:
        self._resp = ResponseData(status_code=int(code), data_interface=value, is_json=True)

    def json_ok(self, value: Any) -> None:
        self.json(HTTPStatus.OK, value)

    def data(self, code: int, content_type: str, data: bytes) -> None:
        self._resp = ResponseData(
            status_code=int(code), content_type=content_type, data_bytes=bytes(data)
        )

    def data_ok(self, content_type: str, data: bytes) -> None:
        self.data(HTTPStatus.OK, content_type, data)

    def err(self, code: int, error: BaseException | None) -> None:
        self.json(code, {"err": None if error is None else str(error)})

    def err_ok(self, error: BaseException | None) -> None:
        self.err(HTTPStatus.OK, error)