"""Errors raised across the chain."""

from __future__ import annotations

from collections.abc import Iterable

from yuchain.hashing import Address, Hash


class YuError(Exception):
    """Base class for chain errors."""


TYPE_ERR = YuError("the type of params error")
INTEGER_OVERFLOW = YuError("integer overflow")
NO_P2P_TOPIC = YuError("no p2p topic")
NO_RUN_MODE = YuError("no run mode")
NO_KEY_TYPE = YuError("no key type")
NO_CONVERGE_TYPE = YuError("no converge type")
GENESIS_BLOCK_ILLEGAL = YuError("genesis block is illegal")
NO_KVDB_TYPE = YuError("no kvdb type")
NO_SQLDB_TYPE = YuError("no sqlDB type")
POOL_OVERFLOW = YuError("pool size is full")
TXN_TIMEOUT = YuError("Txn time out")
TXN_TOO_LARGE = YuError("the size of txn is too large")
TXN_DUPLICATED = YuError("Transaction duplicated")
BLOCK_NOT_FOUND = YuError("block not found")
OUT_OF_LEI = YuError("Lei out")
INSUFFICIENT_FUNDS = YuError("Insufficient Funds")
NO_PERMISSION = YuError("No Permission")
NO_VALID_QC = YuError("Target QC is empty.")
NO_VALID_PARENT_ID = YuError("ParentId is empty.")


class TxnNotFound(YuError, LookupError):
    """A transaction is not known."""

    def __init__(self, txn_hash: bytes) -> None:
        self.txn_hash = Hash(txn_hash)
        super().__init__(f"txn ({self.txn_hash.hex()}) not found")


class BlockSignatureIllegal(YuError):
    """A block carries a bad miner signature."""

    def __init__(self, block_hash: bytes) -> None:
        self.block_hash = Hash(block_hash)
        super().__init__(f"the signature of block({self.block_hash.hex()}) is illegal")


class TxnSignatureIllegal(YuError):
    """A transaction carries a bad signature."""

    def __init__(self, cause: BaseException | None) -> None:
        self.cause = cause
        super().__init__("txn signature illegal")
        if isinstance(cause, BaseException):
            self.__cause__ = cause


class BlockIllegal(YuError):
    """A block failed validation."""

    def __init__(self, block_hash: bytes) -> None:
        self.block_hash = Hash(block_hash).hex()
        super().__init__(f"block({self.block_hash}) illegal")


class NoTxnInP2P(YuError, LookupError):
    """A transaction could not be found on the network."""

    def __init__(self, txn_hash: bytes) -> None:
        self.txn_hash = Hash(txn_hash).hex()
        super().__init__(f"no txn({self.txn_hash}) in P2P network")


class TripodNotFound(YuError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tripod({name}) NOT Found")


class BronzeNotFound(YuError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Bronze({name}) NOT Found")


class WritingNotFound(YuError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Writing({name}) NOT Found")


class ReadingNotFound(YuError, LookupError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Reading({name}) NOT Found")


class WorkerDead(YuError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Worker({name}) is dead")


class WaitTxnsTimeout(YuError, TimeoutError):
    """Waiting for the given transactions timed out."""

    def __init__(self, hashes: Iterable[bytes]) -> None:
        self.hashes = tuple(Hash(h) for h in hashes)
        listed = " ".join(h.hex() for h in self.hashes)
        super().__init__(f"waiting txns-hashes timeout: [{listed}]")


class AccountNotFound(YuError, LookupError):
    def __init__(self, address: bytes) -> None:
        self.account = Address(address).hex()
        super().__init__(f"account({self.account}) not found")


class AmountNegative(YuError, ValueError):
    def __init__(self, amount: int) -> None:
        self.amount = amount
        super().__init__(f"amount({amount}) is negative")