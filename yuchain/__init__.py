"""Building blocks of a blockchain node: hashes, keypairs, configuration, call contexts and wire messages."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "context",
    "errors",
    "hashing",
    "hexbytes",
    "keygen_cli",
    "keypair",
    "metamask",
    "pow",
    "protocol",
    "sync_protocol",
    "types",
]