"""
The DerivationPath class for the supported wallet formats
"""
from enum import Enum

from bitforks.core import UnsupportedFormat
from bitforks.networks import NetworkParameters
from bitforks.wallet.address import p2pkh_address, p2sh_p2wpkh_address, p2wpkh_address

__all__ = ["DerivationPath", "parse_format"]


def parse_format(fmt: str) -> int:
    """
    Return the BIP number for a format tag like "bip84"
    """
    number = fmt.lower().replace("bip", "", 1) if fmt else ""
    if not number.isdigit():
        raise UnsupportedFormat(f"Unknown wallet format: {fmt!r}")
    return int(number)


class DerivationPath(Enum):
    BIP32 = (32, "P2PKH")
    BIP44 = (44, "P2PKH")
    BIP49 = (49, "P2SH_P2WPKH")
    BIP84 = (84, "P2WPKH")

    def __init__(self, purpose: int, script_type: str):
        self.purpose = purpose
        self.script_type = script_type

    @classmethod
    def from_format(cls, fmt: str) -> "DerivationPath":
        bip = parse_format(fmt)
        for member in cls:
            if member.purpose == bip:
                return member
        raise UnsupportedFormat(f"No derivation path for format {fmt!r}")

    @property
    def format(self) -> str:
        return f"bip{self.purpose}"

    def path(self, coin_type: int = 0, account: int = 0) -> str:
        """
        Account-level path. Plain BIP32 wallets keep their accounts directly under the master key
        """
        if self is DerivationPath.BIP32:
            return f"m/{account}"
        return f"m/{self.purpose}'/{coin_type}'/{account}'"

    def address(self, pubkey: bytes, params: NetworkParameters) -> str:
        match self:
            case DerivationPath.BIP32 | DerivationPath.BIP44:
                return p2pkh_address(pubkey, params)
            case DerivationPath.BIP49:
                return p2sh_p2wpkh_address(pubkey, params)
            case DerivationPath.BIP84:
                return p2wpkh_address(pubkey, params)
