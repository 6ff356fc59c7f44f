"""
Testing extended keys against the BIP32 test vectors
"""
import pytest

from bitforks.core import ExtendedKeyError
from bitforks.networks import NETWORKS
from bitforks.wallet import ExtendedKey, parse_path

BITCOIN = NETWORKS.lookup("bitcoin")
TESTNET = NETWORKS.lookup("bitcointestnet")

# Test vector 1
TV1_SEED = bytes.fromhex("000102030405060708090a0b0c0d0e0f")
TV1_M_XPUB = "xpub661MyMwAqRbcFtXgS5sYJABqqG9YLmC4Q1Rdap9gSE8NqtwybGhePY2gZ29ESFjqJoCu1Rupje8YtGqsefD265TMg7usUDFdp6W1EGMcet8"
TV1_M_XPRV = "xprv9s21ZrQH143K3QTDL4LXw2F7HEK3wJUD2nW2nRk4stbPy6cq3jPPqjiChkVvvNKmPGJxWUtg6LnF5kejMRNNU3TGtRBeJgk33yuGBxrMPHi"
TV1_0H_XPUB = "xpub68Gmy5EdvgibQVfPdqkBBCHxA5htiqg55crXYuXoQRKfDBFA1WEjWgP6LHhwBZeNK1VTsfTFUHCdrfp1bgwQ9xv5ski8PX9rL2dZXvgGDnw"
TV1_0H_XPRV = "xprv9uHRZZhk6KAJC1avXpDAp4MDc3sQKNxDiPvvkX8Br5ngLNv1TxvUxt4cV1rGL5hj6KCesnDYUhd7oWgT11eZG7XnxHrnYeSvkzY7d2bhkJ7"
TV1_0H_1_XPUB = "xpub6ASuArnXKPbfEwhqN6e3mwBcDTgzisQN1wXN9BJcM47sSikHjJf3UFHKkNAWbWMiGj7Wf5uMash7SyYq527Hqck2AxYysAA7xmALppuCkwQ"


def test_parse_path():
    assert parse_path("m") == []
    assert parse_path("m/44'/0'/0'") == [0x8000002c, 0x80000000, 0x80000000]
    assert parse_path("m/0h/1/2") == [0x80000000, 1, 2]
    with pytest.raises(ExtendedKeyError):
        parse_path("44'/0'")
    with pytest.raises(ExtendedKeyError):
        parse_path("m/x")


@pytest.mark.asyncio
async def test_master_key(crypto):
    master = ExtendedKey.from_master_seed(TV1_SEED)
    assert master.to_string(BITCOIN) == TV1_M_XPRV
    assert (await master.get_pubkey(crypto)).to_string(BITCOIN) == TV1_M_XPUB


@pytest.mark.asyncio
async def test_hardened_derivation(crypto):
    master = ExtendedKey.from_master_seed(TV1_SEED)
    child = await master.derive_path("m/0'", crypto)
    assert child.to_string(BITCOIN) == TV1_0H_XPRV
    assert (await child.get_pubkey(crypto)).to_string(BITCOIN) == TV1_0H_XPUB


@pytest.mark.asyncio
async def test_public_derivation_matches_private(crypto):
    """
    Deriving a normal child from the xpub gives the public half of the child derived from the xprv
    """
    parent_xpub = ExtendedKey.from_string(TV1_0H_XPUB, BITCOIN)
    public_child = await parent_xpub.derive_child(1, crypto)
    assert public_child.to_string(BITCOIN) == TV1_0H_1_XPUB

    parent_xprv = ExtendedKey.from_string(TV1_0H_XPRV, BITCOIN)
    private_child = await parent_xprv.derive_child(1, crypto)
    assert await private_child.get_pubkey(crypto) == public_child


@pytest.mark.asyncio
async def test_no_hardened_child_from_xpub(crypto):
    xpub = ExtendedKey.from_string(TV1_M_XPUB, BITCOIN)
    with pytest.raises(ExtendedKeyError):
        await xpub.derive_child(0x80000000, crypto)


def test_string_round_trip():
    xprv = ExtendedKey.from_string(TV1_M_XPRV, BITCOIN)
    assert xprv.is_private
    assert xprv.to_string(BITCOIN) == TV1_M_XPRV


def test_version_must_match_network():
    with pytest.raises(ExtendedKeyError):
        ExtendedKey.from_string(TV1_M_XPUB, TESTNET)

    tpub = ExtendedKey.from_string(TV1_M_XPUB, BITCOIN).to_string(TESTNET)
    assert tpub.startswith("tpub")


def test_bad_checksum():
    tampered = TV1_M_XPUB[:-1] + ("9" if TV1_M_XPUB[-1] != "9" else "8")
    with pytest.raises(ExtendedKeyError):
        ExtendedKey.from_string(tampered, BITCOIN)


def test_seed_length():
    with pytest.raises(ExtendedKeyError):
        ExtendedKey.from_master_seed(bytes(15))
