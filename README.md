# yuchain

Building blocks for a modular blockchain node, usable on their own:

- `yuchain.hexbytes` – hex helpers: `to_hex`, `from_hex`, `is_hex`,
  `hex_to_bytes_fixed`, `left_pad_bytes`, `right_pad_bytes` and more.
- `yuchain.hashing` – `keccak256`, `sha256`, and the fixed-size `Hash`
  (32 bytes) and `Address` (20 bytes) types. `Address.hex()` gives the
  EIP-55 checksummed form; `MixedcaseAddress` keeps the original string and
  reports whether its checksum is valid.
- `yuchain.types` – `WrCall` / `RdCall` client calls, `bind_json_params`
  (numbers kept as `JsonNumber` text), block-number encoding, `BlockId`,
  `|`-separated hash lists, the `RunMode`, `NodeType` and `BlockStage` enums
  and the P2P topic names.
- `yuchain.errors` – exceptions rooted at `YuError`, plus ready-made
  instances such as `TYPE_ERR`, `NO_KEY_TYPE` and `GENESIS_BLOCK_ILLEGAL`.
- `yuchain.config` – configuration dataclasses (`KernelConf`, `StateConf`,
  `MevlessConf`, …), `load_toml_conf`, `init_default_cfg` and
  `default_mevless_cfg`.
- `yuchain.keypair` – Ed25519, secp256k1 and secret-free key pairs with
  type-tagged serialisation, and `pubkey_from_bytes` / `pubkey_from_str`.
- `yuchain.metamask` – `metamask_msg_hash`, the hash a wallet signs for a
  personal message.
- `yuchain.pow` – a SHA-256 proof-of-work search (`run`) and check
  (`validate`).
- `yuchain.context` – `ParamsResponse` for typed access to a writing's JSON
  parameters, and `ReadContext` / `ResponseData` for building a reading's
  answer.
- `yuchain.protocol` – API paths, the `APIResponse` envelope with
  `render_success` / `render_error`, and parsing of writing and reading
  request bodies (`parse_signed_wr_call`, `parse_rd_call`).
- `yuchain.sync_protocol` – handshake and transaction-sync messages between
  nodes (`HandShakeRequest`, `HandShakeResp`, `TxnsRequest`) and
  `HandShakeInfo.compare`, which works out the block range a peer is missing.

## Installation

```
pip install .
```

## Generating a keypair

The `yu-keypair` command derives a key pair from a key type and a secret and
prints the public key, the private key (each with and without its type tag)
and the address:

```
yu-keypair ed25519 secret
```

Key types `ed25519`, `secp256k1` and `secret-free` are supported. `sr25519` is
recognised as a name but raises an error; an unknown name prints
`generate keypair failed:  no key type` and exits with status 1.

From Python:

```python
from yuchain.keypair import gen_key_pair_with_secret

pubkey, privkey = gen_key_pair_with_secret("ed25519", b"secret")
signature = privkey.sign_data(b"message")
assert pubkey.verify_signature(b"message", signature)
print(pubkey.address())
print(pubkey.string_with_type())
```

Ed25519 seeds are SHA-256 of the secret. secp256k1 keys sign SHA-256 of the
data and return a 64-byte `r || s` signature with a low S. Note that
secp256k1 keys are written with the type tag `"1"`, which `pubkey_from_bytes`
treats as sr25519 and rejects.

## Hashes and calls

```python
from yuchain.hashing import Hash
from yuchain.types import WrCall

h = Hash.from_hex("0x1234")
print(h.hex())

call = WrCall.from_dict({
    "chain_id": 0,
    "tripod_name": "asset",
    "func_name": "Transfer",
    "params": '{"to": "0x00", "amount": 10}',
})
print(call.hash().hex())
```

`Hash.from_hex` decodes leniently (an optional `0x`, odd lengths padded);
`Hash.from_text` requires `0x` and exactly 64 hex digits and raises
`ValueError` otherwise.

## Configuration

```python
from yuchain.config import init_default_cfg, load_toml_conf, KernelConf

cfg = init_default_cfg()
print(cfg.http_port, cfg.kvdb.kv_type)

node_cfg = load_toml_conf("yu.toml", KernelConf)
```

TOML keys are the dataclass field names (`http_port`, `block_chain`,
`p2p_listen_addrs`, …); unknown keys are ignored and values of the wrong type
raise `ValueError`.

## Proof of work

```python
from yuchain.hashing import Hash
from yuchain.pow import run, validate, target_for_bits

target = target_for_bits(8)
nonce, block_hash = run(Hash(b""), Hash(b""), 1700000000, target, 8)
assert validate(Hash(b""), Hash(b""), 1700000000, nonce, target, 8)
```

## What this package does not do

It is a set of data types, key handling and message formats, not a running
node. It has no blockchain or transaction storage, no transaction pool, no
block production or consensus loop, no HTTP or websocket server and no P2P
networking. `protocol` and `sync_protocol` build and parse the messages such
parts would exchange; sending and serving them is left to the caller.
sr25519 keys are not available.

## Running the tests

```
pip install ".[test]"
pytest
```