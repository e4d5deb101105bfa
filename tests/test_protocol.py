import json

import pytest

from yuchain.errors import YuError
from yuchain.protocol import (
    APIResponse,
    ResultCode,
    SignedWrCall,
    parse_rd_call,
    parse_signed_wr_call,
    render_error,
    render_json,
    render_success,
    version,
)
from yuchain.types import RdCall, WrCall

ADDRESS_HEX = "0x" + "ab" * 20

BODY = {
    "pubkey": "0x0102",
    "address": ADDRESS_HEX,
    "signature": "0xdead",
    "call": {"tripod_name": "asset", "func_name": "Transfer", "params": "{}", "tips": 3},
}


def test_version():
    assert version() == "alpha-v1.0"


def test_result_codes_rendered_as_source_values():
    rendered = [render_json(code, None, None).to_dict()["code"] for code in ResultCode]
    assert rendered == [0, 10001, 10002, 10003]


def test_render_success():
    resp = render_success({"k": 1})
    assert resp.is_success()
    assert resp.to_dict() == {"code": 0, "err_msg": "", "data": {"k": 1}}


def test_render_error():
    resp = render_error(ResultCode.BLOCK_FAILURE, YuError("block not found"))
    assert not resp.is_success()
    assert resp.code == 10001
    assert resp.err_msg == "block not found"
    assert resp.data is None
    assert str(resp.error()) == "block not found"


def test_render_json_without_error():
    resp = render_json(ResultCode.RECEIPT_FAILURE, None, [1])
    assert resp == APIResponse(code=10003, err_msg="", data=[1])


def test_parse_signed_wr_call_from_mapping():
    call = parse_signed_wr_call(BODY)
    assert call.pubkey == bytes.fromhex("0102")
    assert call.address == bytes.fromhex("ab" * 20)
    assert call.signature == bytes.fromhex("dead")
    assert call.call == WrCall(tripod_name="asset", func_name="Transfer", params="{}", tips=3)
    assert call.tripod() == "asset"
    assert call.func_name() == "Transfer"


def test_parse_signed_wr_call_from_bytes_matches_mapping():
    assert parse_signed_wr_call(json.dumps(BODY).encode()) == parse_signed_wr_call(BODY)


def test_parse_signed_wr_call_empty_fields():
    call = parse_signed_wr_call('{"pubkey": "", "signature": "0x"}')
    assert call == SignedWrCall(pubkey=b"", address=b"", signature=b"", call=None)


@pytest.mark.parametrize(
    "pubkey,message",
    [("0102", "without 0x prefix"), ("0x012", "odd length"), ("0xzz", "invalid hex")],
)
def test_parse_signed_wr_call_bad_hex(pubkey, message):
    with pytest.raises(ValueError, match=message):
        parse_signed_wr_call({**BODY, "pubkey": pubkey})


def test_parse_signed_wr_call_bad_body():
    with pytest.raises(ValueError):
        parse_signed_wr_call("[1, 2]")
    with pytest.raises(ValueError):
        parse_signed_wr_call("")
    with pytest.raises(ValueError):
        parse_signed_wr_call({"call": {"tips": "many"}})


def test_parse_rd_call():
    body = {"tripod_name": "asset", "func_name": "QueryBalance", "params": "{}"}
    assert parse_rd_call(json.dumps(body)) == RdCall(**body)
    with pytest.raises(ValueError):
        parse_rd_call('"text"')