"""A simple proof-of-work over a block's header fields."""

from __future__ import annotations

import logging

from yuchain.hashing import NULL_HASH, Hash, sha256

logger = logging.getLogger(__name__)

MAX_INT64 = 2**63 - 1
_LOG_EVERY = 100000


def _wrap_int64(value: int) -> int:
    value &= 2**64 - 1
    return value - 2**64 if value >= 2**63 else value


def int_to_bytes(num: int) -> bytes:
    """Encode ``num`` as a big-endian signed 64-bit integer."""
    return num.to_bytes(8, "big", signed=True)


def prepare_data(
    prev_hash: bytes, txn_root: bytes, timestamp: int, nonce: int, target_bits: int
) -> bytes:
    """Concatenate the previous hash, txn root, timestamp, target bits and nonce."""
    return b"".join(
        (
            bytes(Hash(prev_hash)),
            bytes(Hash(txn_root)),
            int_to_bytes(_wrap_int64(timestamp)),
            int_to_bytes(target_bits),
            int_to_bytes(nonce),
        )
    )


def target_for_bits(target_bits: int) -> int:
    """The target a hash must stay below: ``1 << (256 - target_bits)``."""
    return 1 << (256 - target_bits)


def run(
    prev_hash: bytes, txn_root: bytes, timestamp: int, target: int, target_bits: int
) -> tuple[int, Hash]:
    """Search nonces from zero until the SHA-256 of the data falls below ``target``."""
    logger.info("[[[Mining a new Block!!!]]]")
    nonce = 0
    digest = NULL_HASH
    while nonce < MAX_INT64:
        digest = Hash(sha256(prepare_data(prev_hash, txn_root, timestamp, nonce, target_bits)))
        if nonce % _LOG_EVERY == 0:
            logger.info("Hash is %s", digest.unprefixed_hex())
        if digest.to_int() < target:
            break
        nonce += 1
    return nonce, digest


def validate(
    prev_hash: bytes, txn_root: bytes, timestamp: int, nonce: int, target: int, target_bits: int
) -> bool:
    """Tell whether ``nonce`` makes the data hash fall below ``target``."""
    data = prepare_data(prev_hash, txn_root, timestamp, _wrap_int64(nonce), target_bits)
    return int.from_bytes(sha256(data), "big") < target