"""
Tests for payment URI parsing and encoding
"""
import pytest

from bitforks.core import InvalidAddress, MalformedUri
from bitforks.data import encode_base58check, encode_bech32
from bitforks.plugin import PaymentRequest, encode_uri, info_for, parse_uri

LITECOIN = info_for("litecoin").currency_info
BITCOINCASH = info_for("bitcoincash").currency_info
BITCOIN = info_for("bitcoin").currency_info

PUBKEY_HASH = bytes.fromhex("751e76e8199196d454941c45d1b3a323f1433bd6")
LTC_ADDRESS = encode_base58check(PUBKEY_HASH, b'\x30')
LTC_P2SH_ADDRESS = encode_base58check(PUBKEY_HASH, b'\x32')
LTC_LEGACY_P2SH_ADDRESS = encode_base58check(PUBKEY_HASH, b'\x05')
BTC_ADDRESS = encode_base58check(PUBKEY_HASH, b'\x00')
BTC_SEGWIT_ADDRESS = "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"


def test_round_trip():
    request = PaymentRequest(
        public_address=LTC_ADDRESS,
        native_amount="150000000",
        currency_code="LTC",
        label="Coffee & cake",
        message="Order #12",
    )
    uri = encode_uri(request, "litecoin", LITECOIN)
    assert uri.startswith(f"litecoin:{LTC_ADDRESS}?amount=1.5&")
    assert parse_uri(uri, "litecoin", LITECOIN) == request


def test_bare_address():
    request = PaymentRequest(public_address=BTC_SEGWIT_ADDRESS)
    assert encode_uri(request, "bitcoin", BITCOIN) == BTC_SEGWIT_ADDRESS

    parsed = parse_uri(BTC_SEGWIT_ADDRESS, "bitcoin", BITCOIN)
    assert parsed.public_address == BTC_SEGWIT_ADDRESS
    assert parsed.currency_code == "BTC"
    assert parsed.native_amount is None


def test_whole_amount_encoding():
    request = PaymentRequest(public_address=BTC_ADDRESS, native_amount="1000000000")
    assert encode_uri(request, "bitcoin", BITCOIN) == f"bitcoin:{BTC_ADDRESS}?amount=10"


def test_parse_amounts():
    assert parse_uri(f"bitcoin:{BTC_ADDRESS}?amount=0.00000001", "bitcoin", BITCOIN).native_amount == "1"
    assert parse_uri(f"bitcoin:{BTC_ADDRESS}?amount=21", "bitcoin", BITCOIN).native_amount == "2100000000"


@pytest.mark.parametrize("amount", ["-1", "abc", "0.000000001", "NaN", "1e999999999", "1e5000", "Infinity"])
def test_bad_amount(amount):
    with pytest.raises(MalformedUri):
        parse_uri(f"bitcoin:{BTC_ADDRESS}?amount={amount}", "bitcoin", BITCOIN)


def test_scheme_with_slashes():
    parsed = parse_uri(f"litecoin://{LTC_ADDRESS}?label=shop", "litecoin", LITECOIN)
    assert parsed.public_address == LTC_ADDRESS
    assert parsed.label == "shop"


def test_scheme_mismatch():
    with pytest.raises(MalformedUri):
        parse_uri(f"bitcoin:{LTC_ADDRESS}", "litecoin", LITECOIN)


def test_missing_address():
    with pytest.raises(MalformedUri):
        parse_uri("litecoin:?amount=1", "litecoin", LITECOIN)


def test_foreign_address_rejected():
    """
    A bitcoin P2PKH address is not a litecoin address
    """
    assert parse_uri(LTC_P2SH_ADDRESS, "litecoin", LITECOIN).public_address == LTC_P2SH_ADDRESS
    with pytest.raises(InvalidAddress):
        parse_uri(BTC_ADDRESS, "litecoin", LITECOIN)
    with pytest.raises(InvalidAddress):
        parse_uri(encode_bech32("bc", PUBKEY_HASH), "litecoin", LITECOIN)


def test_legacy_address_normalized():
    parsed = parse_uri(f"litecoin:{LTC_LEGACY_P2SH_ADDRESS}", "litecoin", LITECOIN)
    assert parsed.public_address == LTC_P2SH_ADDRESS
    assert parsed.legacy_address == LTC_LEGACY_P2SH_ADDRESS


def test_empty_label_dropped():
    parsed = parse_uri(f"litecoin:{LTC_ADDRESS}?label=&message=hi%20there", "litecoin", LITECOIN)
    assert parsed.label is None
    assert parsed.message == "hi there"


def test_encode_wrong_currency():
    request = PaymentRequest(public_address=LTC_ADDRESS, currency_code="BTC", native_amount="1")
    with pytest.raises(MalformedUri):
        encode_uri(request, "litecoin", LITECOIN)


def test_encode_invalid_address():
    with pytest.raises(InvalidAddress):
        encode_uri(PaymentRequest(public_address=BTC_ADDRESS, native_amount="1"), "litecoin", LITECOIN)


@pytest.mark.parametrize("native_amount", ["²", "0100", "-5", "1.5", "", "١٠"])
def test_encode_bad_native_amount(native_amount):
    request = PaymentRequest(public_address=BTC_ADDRESS, native_amount=native_amount)
    with pytest.raises(MalformedUri):
        encode_uri(request, "bitcoin", BITCOIN)


def test_encode_zero_amount():
    request = PaymentRequest(public_address=BTC_ADDRESS, native_amount="0")
    assert encode_uri(request, "bitcoin", BITCOIN) == f"bitcoin:{BTC_ADDRESS}?amount=0"


# The same hash in legacy base58 and CashAddr form
BCH_LEGACY_ADDRESS = "1BpEi6DfDAUFd7GtittLSdBeYJvcoaVggu"
BCH_CASH_ADDRESS = "bitcoincash:qpm2qsznhks23z7629mms6s4cwef74vcwvy22gdx6a"


def test_bitcoincash_legacy_address_rewritten():
    parsed = parse_uri(BCH_LEGACY_ADDRESS, "bitcoincash", BITCOINCASH)
    assert parsed.public_address == BCH_CASH_ADDRESS
    assert parsed.legacy_address == BCH_LEGACY_ADDRESS


def test_bitcoincash_round_trip():
    request = PaymentRequest(public_address=BCH_CASH_ADDRESS, native_amount="100000", currency_code="BCH")
    uri = encode_uri(request, "bitcoincash", BITCOINCASH)
    assert uri == f"{BCH_CASH_ADDRESS}?amount=0.001"
    assert parse_uri(uri, "bitcoincash", BITCOINCASH) == request


def test_bitcoincash_unprefixed_address():
    parsed = parse_uri(BCH_CASH_ADDRESS.split(":")[1].upper(), "bitcoincash", BITCOINCASH)
    assert parsed.public_address == BCH_CASH_ADDRESS
    assert parsed.legacy_address is None


@pytest.mark.parametrize("address", [BTC_SEGWIT_ADDRESS, LTC_ADDRESS, BCH_CASH_ADDRESS[:-1] + "b"])
def test_bitcoincash_rejects_foreign_address(address):
    with pytest.raises(InvalidAddress):
        parse_uri(address, "bitcoincash", BITCOINCASH)
