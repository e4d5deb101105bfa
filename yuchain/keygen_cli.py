"""Command that derives a key pair from a key type and a secret."""

from __future__ import annotations

import argparse
import sys

from yuchain.errors import YuError
from yuchain.keypair import gen_key_pair_with_secret


def main(argv: list[str] | None = None) -> int:
    """Print the keys and address derived from the given type and secret."""
    parser = argparse.ArgumentParser(
        prog="yu-keypair",
        description="Derive a key pair from a key type and a secret.",
    )
    parser.add_argument("key_type", help="secret-free, sr25519, ed25519 or secp256k1")
    parser.add_argument("secret", help="text the key pair is derived from")
    args = parser.parse_args(argv)

    try:
        pubkey, privkey = gen_key_pair_with_secret(args.key_type, args.secret.encode("utf-8"))
    except YuError as exc:
        print("generate keypair failed: ", exc)
        return 1

    print("public key: ", pubkey)
    print("public key with type: ", pubkey.string_with_type())
    print("private key: ", privkey)
    print("private key with type: ", privkey.string_with_type())
    print("address: ", pubkey.address())
    return 0


if __name__ == "__main__":
    sys.exit(main())