"""
Methods for testing encoding and decoding
"""
from secrets import token_bytes

import pytest

from bitforks.core import DataEncodingError
from bitforks.crypto import hash160, hash256
from bitforks.data import (decode_base58check, decode_bech32, decode_cashaddr, encode_base58check, encode_bech32,
                           encode_cashaddr)

# --- Messages
msg1 = "Bech32 encoded data does not start with required bc1q for expected P2WPKH locking script"
msg2 = "Decoded P2WPKH Bech32 address doesn't match original byte data"

# Block 1 coinbase public key and its address
BLOCK1_PUBKEY = bytes.fromhex(
    "0496b538e853519c726a2c91e61ec11600ae1390813a627c66fb8be7947be63c52da7589379515d4e0a604f8141781e62294721166bf621e73a82cbf2342c858ee")
BLOCK1_ADDRESS = "12c6DSiU4Rq3P4ZxziKxzrL5LmMBrzjrJX"


def test_bech32_codec():
    _random_data = token_bytes(20)
    _address = encode_bech32("bc", _random_data)

    assert _address[:4] == "bc1q", msg1
    witver, program = decode_bech32("bc", _address)
    assert witver == 0
    assert program == _random_data, msg2


def test_bech32_wrong_hrp():
    _address = encode_bech32("lc", token_bytes(20))
    with pytest.raises(DataEncodingError):
        decode_bech32("bc", _address)


def test_bech32_program_length():
    with pytest.raises(DataEncodingError):
        encode_bech32("bc", token_bytes(19))


def test_base58check_known_address():
    assert encode_base58check(hash160(BLOCK1_PUBKEY), b'\x00') == BLOCK1_ADDRESS
    assert decode_base58check(BLOCK1_ADDRESS) == b'\x00' + hash160(BLOCK1_PUBKEY)


def test_base58check_bad_checksum():
    _address = encode_base58check(token_bytes(20), b'\x30')
    # Swap the last character for a different one
    tampered = _address[:-1] + ("2" if _address[-1] != "2" else "3")
    with pytest.raises(DataEncodingError):
        decode_base58check(tampered)


def test_hash256_known_value():
    assert hash256(b"").hex() == "5df6e0e2761359d30a8275058e299fcc0381534545f55cf43e41983f5d4c9456"


# Legacy 1BpEi6DfDAUFd7GtittLSdBeYJvcoaVggu in CashAddr form
CASH_ADDRESS = "bitcoincash:qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a"
CASH_HASH = decode_base58check("1BpEi6DfDAUFd7GtittLSdBeYJvcoaVggu")[1:]


def test_cashaddr_known_address():
    assert encode_cashaddr("bitcoincash", CASH_HASH, 0x00) == CASH_ADDRESS
    assert decode_cashaddr("bitcoincash", CASH_ADDRESS) == b'\x00' + CASH_HASH
    # The prefix is optional and a single case is accepted
    assert decode_cashaddr("bitcoincash", CASH_ADDRESS.split(":")[1].upper()) == b'\x00' + CASH_HASH


@pytest.mark.parametrize("address", [
    CASH_ADDRESS[:-1] + "b",
    "bchtest:qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a",
    "bitcoincash:Qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a",
    "bitcoincash:",
    "bitcoincash:qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6b1",
])
def test_cashaddr_rejects(address):
    with pytest.raises(DataEncodingError):
        decode_cashaddr("bitcoincash", address)


def test_cashaddr_unsupported_version():
    with pytest.raises(DataEncodingError):
        encode_cashaddr("bitcoincash", CASH_HASH, 0x30)
