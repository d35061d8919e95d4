"""Shared fixtures for the nostr_sdk test suite."""

import pytest

from nostr_sdk.keys import Keypair

# secret 3 -> 3G, the first BIP-340 test vector key
ALICE_SK = "0000000000000000000000000000000000000000000000000000000000000003"
ALICE_PK = "f9308a019258c31049344f85f89d5229b531c845836f99b08601f113bce036f9"

# secret 1 -> G
BOB_SK = "0000000000000000000000000000000000000000000000000000000000000001"
BOB_PK = "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"

CAROL_SK = "7f7ff03d123792d6ac594bfa67bf6d0c0ab55b6b1fdb6249303fe861f1ccba9a"


@pytest.fixture
def alice() -> Keypair:
    return Keypair.from_hex(ALICE_SK)


@pytest.fixture
def bob() -> Keypair:
    return Keypair.from_hex(BOB_SK)


@pytest.fixture
def carol() -> Keypair:
    return Keypair.from_hex(CAROL_SK)
