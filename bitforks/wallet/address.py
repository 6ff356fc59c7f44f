"""
Address encoding and validation against a network's address prefixes
"""
from dataclasses import dataclass

from bitforks.core import DataEncodingError, InvalidAddress, UnsupportedFormat
from bitforks.crypto import hash160
from bitforks.data import (decode_base58check, decode_bech32, decode_cashaddr, encode_base58check, encode_bech32,
                           encode_cashaddr)
from bitforks.networks import NetworkParameters

__all__ = ["AddressInfo", "p2pkh_address", "p2sh_p2wpkh_address", "p2wpkh_address", "validate_address",
           "to_new_format"]

P2PKH = "p2pkh"
P2SH = "p2sh"
P2WPKH = "p2wpkh"
P2WSH = "p2wsh"
P2TR = "p2tr"


@dataclass(frozen=True)
class AddressInfo:
    variant: str
    payload: bytes
    legacy: bool = False


# --- ENCODE --- #

def _hash_address(variant: str, payload: bytes, params: NetworkParameters) -> str:
    """
    Current-format address for a P2PKH or P2SH hash: CashAddr where the network uses it, base58 otherwise
    """
    prefix = params.address_prefix
    if prefix.cashaddr is not None:
        legacy = params.legacy_address_prefix
        version = legacy.pubkeyhash if variant == P2PKH else legacy.scripthash
        if version is None:
            raise UnsupportedFormat(f"Network {params.name} has no {variant} CashAddr version")
        return encode_cashaddr(prefix.cashaddr, payload, version)

    version = prefix.pubkeyhash if variant == P2PKH else prefix.scripthash
    if version is None:
        raise UnsupportedFormat(f"Network {params.name} has no {variant} version byte")
    return encode_base58check(payload, bytes([version]))


def p2pkh_address(pubkey: bytes, params: NetworkParameters) -> str:
    return _hash_address(P2PKH, hash160(pubkey), params)


def p2sh_p2wpkh_address(pubkey: bytes, params: NetworkParameters) -> str:
    # OP_0 || OP_PUSHBYTES_20 || pubkeyhash
    redeem_script = b'\x00\x14' + hash160(pubkey)
    return _hash_address(P2SH, hash160(redeem_script), params)


def p2wpkh_address(pubkey: bytes, params: NetworkParameters) -> str:
    hrp = params.address_prefix.bech32
    if hrp is None:
        raise UnsupportedFormat(f"Network {params.name} has no bech32 prefix")
    return encode_bech32(hrp, hash160(pubkey), witver=0)


# --- VALIDATE --- #

def _validate_bech32(address: str, hrp: str) -> AddressInfo:
    try:
        witver, program = decode_bech32(hrp, address)
    except DataEncodingError as e:
        raise InvalidAddress(str(e)) from e

    if witver == 0 and len(program) == 20:
        return AddressInfo(P2WPKH, program)
    if witver == 0 and len(program) == 32:
        return AddressInfo(P2WSH, program)
    if witver == 1 and len(program) == 32:
        return AddressInfo(P2TR, program)
    raise InvalidAddress(f"Unsupported witness program (version {witver}, {len(program)} bytes)")


def _is_cashaddr(address: str, prefix: str) -> bool:
    # Unprefixed CashAddr strings start with q (P2PKH) or p (P2SH); base58 forms never use lowercase q or p there
    text = address.lower()
    if text.startswith(prefix + ":"):
        return True
    return ":" not in text and text[0] in "qp" and address in (text, address.upper())


def _validate_cashaddr(address: str, params: NetworkParameters) -> AddressInfo:
    try:
        decoded = decode_cashaddr(params.address_prefix.cashaddr, address)
    except DataEncodingError as e:
        raise InvalidAddress(str(e)) from e

    version, payload = decoded[0], decoded[1:]
    legacy = params.legacy_address_prefix
    if version == legacy.pubkeyhash:
        return AddressInfo(P2PKH, payload)
    if version == legacy.scripthash:
        return AddressInfo(P2SH, payload)
    raise InvalidAddress(f"Unsupported CashAddr type for {params.name}: {address}")


def validate_address(address: str, params: NetworkParameters) -> AddressInfo:
    """
    Check an address against the network: bech32 or CashAddr prefix where the network has one, otherwise base58
    checksum and version byte. Legacy version bytes are accepted and flagged.
    """
    if not address:
        raise InvalidAddress("Empty address")

    prefix = params.address_prefix
    if prefix.bech32 is not None and address.lower().startswith(prefix.bech32 + "1"):
        return _validate_bech32(address, prefix.bech32)
    if prefix.cashaddr is not None and _is_cashaddr(address, prefix.cashaddr):
        return _validate_cashaddr(address, params)

    try:
        decoded = decode_base58check(address)
    except DataEncodingError as e:
        raise InvalidAddress(f"Invalid address for {params.name}: {address}") from e
    if len(decoded) != 21:
        raise InvalidAddress(f"Address payload must be 21 bytes, not {len(decoded)}")

    version, payload = decoded[0], decoded[1:]
    legacy = params.legacy_address_prefix
    if version == prefix.pubkeyhash:
        return AddressInfo(P2PKH, payload)
    if version == prefix.scripthash:
        return AddressInfo(P2SH, payload)
    if version == legacy.pubkeyhash:
        return AddressInfo(P2PKH, payload, legacy=True)
    if version == legacy.scripthash:
        return AddressInfo(P2SH, payload, legacy=True)
    raise InvalidAddress(f"Version byte {version:#04x} is not a {params.name} address prefix")


def to_new_format(address: str, params: NetworkParameters) -> str:
    """
    Rewrite an address into the network's current format. Legacy prefixes are replaced and CashAddr strings
    gain their prefix in lowercase; anything else is returned as given
    """
    info = validate_address(address, params)
    if info.legacy or (params.address_prefix.cashaddr is not None and info.variant in (P2PKH, P2SH)):
        return _hash_address(info.variant, info.payload, params)
    return address
