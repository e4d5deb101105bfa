import pytest

from yuchain.errors import (
    AccountNotFound,
    AmountNegative,
    BlockIllegal,
    BlockSignatureIllegal,
    BronzeNotFound,
    NoTxnInP2P,
    ReadingNotFound,
    TripodNotFound,
    TxnNotFound,
    TxnSignatureIllegal,
    WaitTxnsTimeout,
    WorkerDead,
    WritingNotFound,
    YuError,
)
from yuchain.hashing import Address, Hash

HASH = Hash.from_hex("0x1234")


def test_txn_not_found():
    with pytest.raises(LookupError) as info:
        raise TxnNotFound(HASH)
    assert str(info.value) == f"txn ({HASH.hex()}) not found"
    assert info.value.txn_hash == HASH
    assert isinstance(info.value, YuError)


def test_block_signature_illegal_names_block():
    exc = BlockSignatureIllegal(HASH)
    assert HASH.hex() in str(exc)
    assert exc.block_hash == HASH


def test_block_illegal_and_no_txn_keep_hex():
    assert BlockIllegal(HASH).block_hash == HASH.hex()
    assert NoTxnInP2P(HASH).txn_hash == HASH.hex()
    assert HASH.hex() in str(NoTxnInP2P(HASH))


def test_txn_signature_illegal_keeps_cause():
    cause = ValueError("bad sig")
    exc = TxnSignatureIllegal(cause)
    assert exc.cause is cause
    assert exc.__cause__ is cause
    assert "bad sig" not in str(exc)


@pytest.mark.parametrize(
    "cls, kind",
    [
        (TripodNotFound, "Tripod"),
        (BronzeNotFound, "Bronze"),
        (WritingNotFound, "Writing"),
        (ReadingNotFound, "Reading"),
    ],
)
def test_not_found_by_name(cls, kind):
    exc = cls("asset")
    assert str(exc) == f"{kind}(asset) NOT Found"
    assert exc.name == "asset"
    assert isinstance(exc, LookupError)


def test_worker_dead():
    exc = WorkerDead("w1")
    assert exc.name == "w1"
    assert "w1" in str(exc)


def test_wait_txns_timeout_lists_hashes():
    other = Hash.from_hex("0xff")
    exc = WaitTxnsTimeout({HASH: True, other: True})
    assert set(exc.hashes) == {HASH, other}
    assert HASH.hex() in str(exc) and other.hex() in str(exc)
    assert isinstance(exc, TimeoutError)


def test_account_not_found_uses_checksum_address():
    addr = Address.from_hex("0x00000000000000000000000000000000000000ab")
    exc = AccountNotFound(addr)
    assert exc.account == addr.hex()
    assert str(exc) == f"account({addr.hex()}) not found"


def test_amount_negative():
    exc = AmountNegative(-5)
    assert exc.amount == -5
    assert "-5" in str(exc)
    assert isinstance(exc, ValueError)