import pytest

from yuchain.errors import NO_KEY_TYPE, YuError
from yuchain.hashing import NULL_ADDRESS, sha256
from yuchain.keypair import (
    SECP256K1_ORDER,
    EdPrivkey,
    EdPubkey,
    FreePrivkey,
    FreePubkey,
    KeyType,
    SecpPrivkey,
    SecpPubkey,
    gen_ed_key_with_secret,
    gen_key_pair,
    gen_key_pair_with_secret,
    gen_secp_key_with_secret,
    pubkey_from_bytes,
    pubkey_from_str,
)
from yuchain.types import WrCall

WR_CALL = WrCall(tripod_name="asset", func_name="Transfer", params="params-json-codec")


@pytest.mark.parametrize("key_type", [KeyType.ED25519, KeyType.SECP256K1])
def test_sign_and_verify_wrcall_hash(key_type):
    pub, priv = gen_key_pair(key_type)
    digest = WR_CALL.hash()
    sig = priv.sign_data(digest)
    assert pub.verify_signature(digest, sig)
    assert not pub.verify_signature(digest[::-1], sig)


@pytest.mark.parametrize("key_type", ["ed25519", "secp256k1"])
def test_key_type_names(key_type):
    pub, priv = gen_key_pair(key_type)
    assert pub.type() == key_type
    assert priv.type() == key_type


def test_sr25519_is_not_supported():
    with pytest.raises(YuError):
        gen_key_pair(KeyType.SR25519)
    with pytest.raises(YuError):
        gen_key_pair_with_secret(KeyType.SR25519, b"node1")


def test_unknown_key_type():
    with pytest.raises(YuError) as excinfo:
        gen_key_pair("bogus")
    assert excinfo.value is NO_KEY_TYPE
    with pytest.raises(YuError) as excinfo:
        gen_key_pair_with_secret("bogus", b"x")
    assert excinfo.value is NO_KEY_TYPE


def test_secret_free_pair():
    pub, priv = gen_key_pair_with_secret(KeyType.SECRET_FREE, b"x")
    assert pub == FreePubkey()
    assert priv == FreePrivkey()
    assert priv.sign_data(b"data") == b""
    assert pub.verify_signature(b"data", b"anything")
    assert pub.address() == NULL_ADDRESS
    assert str(pub) == "0x"
    assert pub.string_with_type() == "0x30"


def test_ed_key_is_deterministic():
    pub1, priv1 = gen_ed_key_with_secret(b"node1")
    pub2, priv2 = gen_key_pair_with_secret("ed25519", b"node1")
    assert pub1 == pub2
    assert priv1 == priv2
    other, _ = gen_ed_key_with_secret(b"node2")
    assert other != pub1
    assert other.address() != pub1.address()


def test_ed_key_layout():
    pub, priv = gen_ed_key_with_secret(b"node1")
    raw = priv.to_bytes()
    assert len(raw) == 64
    assert raw[:32] == sha256(b"node1")
    assert raw[32:] == pub.to_bytes()
    assert len(pub.to_bytes()) == 32
    assert pub.bytes_with_type()[:1] == b"2"
    assert priv.bytes_with_type()[:1] == b"2"
    assert pub.string_with_type().startswith("0x32")
    assert EdPrivkey(raw) == priv


def test_ed_address_has_address_length():
    pub, _ = gen_ed_key_with_secret(b"node1")
    assert len(pub.address()) == 20
    with pytest.raises(ValueError):
        EdPubkey(b"short").address()


def test_ed_verify_rejects_bad_signatures():
    pub, priv = gen_ed_key_with_secret(b"node1")
    sig = priv.sign_data(b"msg")
    assert pub.verify_signature(b"msg", sig)
    assert not pub.verify_signature(b"msg", sig[:-1])
    tampered = bytes([sig[0] ^ 1]) + sig[1:]
    assert not pub.verify_signature(b"msg", tampered)
    assert not EdPubkey(b"bad").verify_signature(b"msg", sig)


def test_ed_pubkey_round_trip_through_tagged_bytes():
    pub, _ = gen_ed_key_with_secret(b"node3")
    assert pubkey_from_bytes(pub.bytes_with_type()) == pub
    assert pubkey_from_str(pub.string_with_type()) == pub


def test_secp_key_from_secret_matches_known_scalar():
    _, priv = gen_secp_key_with_secret(b"test")
    assert priv.to_bytes() == bytes.fromhex(
        "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a09"
    )


def test_secp_key_layout():
    pub, priv = gen_secp_key_with_secret(b"test")
    assert len(pub.to_bytes()) == 33
    assert pub.to_bytes()[0] in (2, 3)
    assert priv.public_key() == pub
    assert pub.bytes_with_type()[:1] == b"1"
    assert priv.bytes_with_type()[:1] == b"1"
    assert len(pub.address()) == 20
    with pytest.raises(ValueError):
        SecpPubkey(b"\x02").address()


def test_secp_signature_is_low_s_and_rejects_high_s():
    pub, priv = gen_secp_key_with_secret(b"test")
    sig = priv.sign_data(b"payload")
    assert len(sig) == 64
    r = int.from_bytes(sig[:32], "big")
    s = int.from_bytes(sig[32:], "big")
    assert s <= SECP256K1_ORDER // 2
    assert pub.verify_signature(b"payload", sig)
    high = r.to_bytes(32, "big") + (SECP256K1_ORDER - s).to_bytes(32, "big")
    assert not pub.verify_signature(b"payload", high)
    assert not pub.verify_signature(b"payload", sig[:63])


def test_secp_private_key_range():
    with pytest.raises(ValueError):
        SecpPrivkey(bytes(32))
    with pytest.raises(ValueError):
        SecpPrivkey(b"\x01" * 31)


def test_keys_of_different_types_are_not_equal():
    ed_pub, _ = gen_ed_key_with_secret(b"x")
    secp_pub, _ = gen_secp_key_with_secret(b"x")
    assert ed_pub != secp_pub
    assert FreePubkey() != FreePrivkey()


def test_pubkey_from_bytes_errors():
    with pytest.raises(YuError):
        pubkey_from_bytes(b"")
    with pytest.raises(YuError) as excinfo:
        pubkey_from_bytes(b"9abc")
    assert excinfo.value is NO_KEY_TYPE
    assert pubkey_from_bytes(b"0") == FreePubkey()
    secp = pubkey_from_bytes(b"3" + b"\x02" * 33)
    assert secp == SecpPubkey(b"\x02" * 33)