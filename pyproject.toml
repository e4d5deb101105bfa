[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "yuchain"
version = "0.1.0"
description = "Building blocks of a modular blockchain node: hashes, addresses, keypairs, configuration, call contexts and wire messages."
requires-python = ">=3.11"
keywords = [
    "blockchain",
    "keypair",
    "ed25519",
    "secp256k1",
    "keccak",
    "proof-of-work",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Distributed Computing",
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "pycryptodome",
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
yu-keypair = "yuchain.keygen_cli:main"

[tool.hatch.build.targets.wheel]
packages = ["yuchain"]

[tool.pytest.ini_options]
addopts = "-ra"
