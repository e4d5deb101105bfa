"""Node configuration, loaded from TOML."""

import dataclasses
import posixpath
import tomllib
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from yuchain.types import RunMode

_C = TypeVar("_C")


def _convert(hint: Any, value: Any, name: str) -> Any:
    if isinstance(hint, type) and dataclasses.is_dataclass(hint):
        return _build(hint, value)
    if hint is RunMode:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name}: expected an integer")
        return RunMode(value)
    if hint is bool:
        if not isinstance(value, bool):
            raise ValueError(f"{name}: expected a boolean")
        return value
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name}: expected an integer")
        return value
    if hint is str:
        if not isinstance(value, str):
            raise ValueError(f"{name}: expected a string")
        return value
    if typing.get_origin(hint) is list:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValueError(f"{name}: expected an array of strings")
        return list(value)
    raise ValueError(f"{name}: unsupported type {hint!r}")


def _build(cls: type[_C], data: Mapping[str, Any]) -> _C:
    """Build a config dataclass from a parsed TOML table; unknown keys are ignored."""
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a table for {cls.__name__}")
    kwargs = {
        f.name: _convert(f.type, data[f.name], f.name)
        for f in dataclasses.fields(cls)  # type: ignore[arg-type]
        if f.name in data
    }
    return cls(**kwargs)


@dataclass
class SqlDbConf:
    sql_db_type: str = ""
    dsn: str = ""
    max_open_connections: int = 0
    max_idle_connections: int = 0


@dataclass
class KVConf:
    kv_type: str = ""
    path: str = ""
    hosts: list[str] = field(default_factory=list)
    use_sql_db: bool = False
    sql_db: SqlDbConf = field(default_factory=SqlDbConf)


@dataclass
class P2pConf:
    p2p_listen_addrs: list[str] = field(default_factory=list)
    bootnodes: list[str] = field(default_factory=list)
    protocol_id: str = ""
    # 0: RSA, 1: Ed25519, 2: Secp256k1, 3: ECDSA
    node_key_type: int = 0
    node_key_rand_seed: int = 0
    node_key: str = ""
    node_key_bits: int = 0
    node_key_file: str = ""


@dataclass
class BlockchainConf:
    chain_id: int = 0
    chain_db: SqlDbConf = field(default_factory=SqlDbConf)
    cache_size: int = 0


@dataclass
class TxpoolConf:
    pool_size: int = 0
    txn_max_size: int = 0


@dataclass
class KernelConf:
    node_type: int = 0
    data_dir: str = ""
    sync_mode: int = 0
    run_mode: RunMode = RunMode.LOCAL_NODE
    grpc_port: str = ""
    http_port: str = ""
    ws_port: str = ""
    log_level: str = ""
    log_output: str = ""
    lei_limit: int = 0
    statedb_type: str = ""
    kvdb: KVConf = field(default_factory=KVConf)
    block_chain: BlockchainConf = field(default_factory=BlockchainConf)
    txpool: TxpoolConf = field(default_factory=TxpoolConf)
    p2p: P2pConf = field(default_factory=P2pConf)
    is_admin: bool = False
    # the chain stops at this height; 0 means never
    max_block_num: int = 0
    enable_pprof: bool = False
    pprof_port: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "KernelConf":
        """Build a kernel configuration from a parsed TOML table."""
        return _build(cls, data)


@dataclass
class MptKvConf:
    index_db: KVConf = field(default_factory=KVConf)
    node_base: KVConf = field(default_factory=KVConf)


@dataclass
class EvmKvConf:
    index_db: KVConf = field(default_factory=KVConf)
    node_base: KVConf = field(default_factory=KVConf)
    fpath: str = ""
    cache: int = 0
    handles: int = 0
    namespace: str = ""
    read_only: bool = False


@dataclass
class StateConf:
    kv: MptKvConf = field(default_factory=MptKvConf)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StateConf":
        """Build a state configuration from a parsed TOML table."""
        return _build(cls, data)


@dataclass
class MevlessConf:
    pack_number: int = 0
    addr: str = ""
    charge: int = 0
    db_path: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MevlessConf":
        """Build a MEV-less configuration from a parsed TOML table."""
        return _build(cls, data)


def load_toml_conf(path: str, conf_type: type[_C]) -> _C:
    """Read a TOML file into a new instance of ``conf_type``."""
    try:
        with open(path, "rb") as fh:
            data = tomllib.load(fh)
        return _build(conf_type, data)
    except ValueError as exc:
        raise ValueError(f"load config-file({path}) error: {exc}") from exc


def init_default_cfg() -> KernelConf:
    """Return the default kernel configuration."""
    data_dir = "yu"
    return KernelConf(
        run_mode=RunMode.LOCAL_NODE,
        data_dir=data_dir,
        http_port="7999",
        ws_port="8999",
        log_level="info",
        log_output=posixpath.join(data_dir, "yu.log"),
        lei_limit=50000,
        enable_pprof=True,
        pprof_port="10199",
        p2p=P2pConf(
            p2p_listen_addrs=["/ip4/127.0.0.1/tcp/8887"],
            bootnodes=[],
            protocol_id="yu",
            node_key_type=1,
            node_key_rand_seed=1,
        ),
        kvdb=KVConf(kv_type="pebble", path="yu.db", hosts=[]),
        block_chain=BlockchainConf(
            chain_id=0,
            chain_db=SqlDbConf(sql_db_type="sqlite", dsn="chain.db"),
            cache_size=10,
        ),
        txpool=TxpoolConf(pool_size=2048, txn_max_size=1024000),
    )


def default_mevless_cfg() -> MevlessConf:
    """Return the default MEV-less ordering configuration."""
    return MevlessConf(
        pack_number=10000,
        addr="localhost:9071",
        charge=1000,
        db_path="yu/mev_less",
    )