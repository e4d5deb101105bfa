import pytest

from yuchain.hashing import Hash, sha256
from yuchain.pow import int_to_bytes, prepare_data, run, target_for_bits, validate

PREV = Hash.from_hex("0xaa")
ROOT = Hash.from_hex("0xbb")
TIMESTAMP = 1692652052812


def test_int_to_bytes_is_big_endian_int64():
    assert int_to_bytes(1) == bytes(7) + b"\x01"
    assert int_to_bytes(-1) == b"\xff" * 8
    assert len(int_to_bytes(2**63 - 1)) == 8
    with pytest.raises(OverflowError):
        int_to_bytes(2**63)


def test_prepare_data_layout():
    data = prepare_data(PREV, ROOT, TIMESTAMP, 7, 16)
    assert len(data) == 88
    assert data[:32] == PREV
    assert data[32:64] == ROOT
    assert data[64:72] == int_to_bytes(TIMESTAMP)
    assert data[72:80] == int_to_bytes(16)
    assert data[80:] == int_to_bytes(7)


def test_prepare_data_wraps_large_timestamp():
    data = prepare_data(PREV, ROOT, 2**64 - 1, 0, 16)
    assert data[64:72] == int_to_bytes(-1)


@pytest.mark.parametrize("bits", [1, 8, 16, 255])
def test_target_for_bits(bits):
    assert target_for_bits(bits).bit_length() == 257 - bits


def test_run_with_full_target_takes_first_nonce():
    nonce, digest = run(PREV, ROOT, TIMESTAMP, target_for_bits(0), 0)
    assert nonce == 0
    assert digest == Hash(sha256(prepare_data(PREV, ROOT, TIMESTAMP, 0, 0)))


def test_run_finds_smallest_valid_nonce():
    bits = 8
    target = target_for_bits(bits)
    nonce, digest = run(PREV, ROOT, TIMESTAMP, target, bits)
    assert digest.to_int() < target
    assert validate(PREV, ROOT, TIMESTAMP, nonce, target, bits)
    assert not any(validate(PREV, ROOT, TIMESTAMP, n, target, bits) for n in range(nonce))


def test_validate_with_zero_target_fails():
    assert not validate(PREV, ROOT, TIMESTAMP, 0, 0, 16)


def test_validate_depends_on_header_fields():
    bits = 8
    target = target_for_bits(bits)
    nonce, _ = run(PREV, ROOT, TIMESTAMP, target, bits)
    other_nonce, _ = run(ROOT, PREV, TIMESTAMP, target, bits)
    assert validate(ROOT, PREV, TIMESTAMP, other_nonce, target, bits)
    assert validate(PREV, ROOT, TIMESTAMP, nonce, target, bits)