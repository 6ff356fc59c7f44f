"""
Methods for encoding and decoding addresses and extended keys
"""
import base58
import bech32
from cashaddress import convert

from bitforks.core import DataEncodingError

__all__ = ["encode_base58check", "decode_base58check", "encode_bech32", "decode_bech32", "encode_cashaddr",
           "decode_cashaddr"]

CASHADDR_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"


# --- BASE58 ENCODING --- #

def encode_base58check(payload: bytes, prefix: bytes = b'') -> str:
    """
    Returns the Base58Check encoding of prefix || payload
    """
    return base58.b58encode_check(prefix + payload).decode("ascii")


def decode_base58check(data: str) -> bytes:
    """
    Given a string of base58Check chars, we return the payload with the checksum removed.
    Raise DataEncodingError if the string doesn't decode or the checksum fails
    """
    try:
        return base58.b58decode_check(data)
    except ValueError as e:
        raise DataEncodingError(f"Invalid base58check string: {data}") from e


# --- BECH32 ENCODING --- #

def encode_bech32(hrp: str, program: bytes, witver: int = 0) -> str:
    """
    Returns the segwit address for the given witness program.
    """
    if len(program) not in (20, 32):
        raise DataEncodingError(f"Witness program must be 20 or 32 bytes, not {len(program)}")
    address = bech32.encode(hrp, witver, program)
    if address is None:
        raise DataEncodingError(f"Failed to encode witness program under hrp {hrp}")
    return address


def decode_bech32(hrp: str, address: str) -> tuple[int, bytes]:
    """
    Given a segwit address we return the witness version and program. The hrp must match.
    """
    witver, program = bech32.decode(hrp, address)
    if witver is None:
        raise DataEncodingError(f"Invalid bech32 address for hrp {hrp}: {address}")
    return witver, bytes(program)


# --- CASHADDR ENCODING --- #

def encode_cashaddr(prefix: str, payload: bytes, version: int) -> str:
    """
    Returns the CashAddr string (prefix included) for the base58 address version || payload.
    Only the mainnet legacy versions 0x00 (P2PKH) and 0x05 (P2SH) have a CashAddr form.
    """
    try:
        address = convert.to_cash_address(encode_base58check(payload, bytes([version])))
    except convert.InvalidAddress as e:
        raise DataEncodingError(f"No CashAddr form for version {version:#04x}") from e
    if not address.startswith(prefix + ":"):
        raise DataEncodingError(f"CashAddr prefix {prefix} is not supported")
    return address


def decode_cashaddr(prefix: str, address: str) -> bytes:
    """
    Given a CashAddr string, with or without its prefix, we return the equivalent base58 payload (version || hash).
    The prefix must match and the string must not mix cases.
    """
    if address not in (address.lower(), address.upper()):
        raise DataEncodingError(f"Mixed case CashAddr: {address}")
    text = address.lower()
    if ":" not in text:
        text = f"{prefix}:{text}"

    address_prefix, _, body = text.partition(":")
    if address_prefix != prefix:
        raise DataEncodingError(f"CashAddr prefix {address_prefix!r} is not {prefix!r}")
    if not body or any(c not in CASHADDR_CHARSET for c in body):
        raise DataEncodingError(f"Invalid CashAddr characters: {address}")
    if not convert.is_valid(text):
        raise DataEncodingError(f"Invalid CashAddr checksum or payload: {address}")
    return decode_base58check(convert.to_legacy_address(text))
