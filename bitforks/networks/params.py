"""
Per-network consensus and address parameters
"""
from dataclasses import dataclass, field
from typing import Optional

__all__ = ["KeyPrefix", "AddressPrefix", "LegacyAddressPrefix", "NetworkParameters"]


@dataclass(frozen=True)
class KeyPrefix:
    privkey: int
    xpubkey: int
    xprivkey: int
    xpubkey58: str
    xprivkey58: str
    coin_type: int

    @property
    def xpub_version(self) -> bytes:
        return self.xpubkey.to_bytes(4, "big")

    @property
    def xprv_version(self) -> bytes:
        return self.xprivkey.to_bytes(4, "big")


@dataclass(frozen=True)
class AddressPrefix:
    """
    Current address formats. A CashAddr network carries no base58 version bytes here; its base58 addresses are
    legacy ones.
    """
    pubkeyhash: Optional[int] = None
    scripthash: Optional[int] = None
    witnesspubkeyhash: Optional[int] = None
    witnessscripthash: Optional[int] = None
    bech32: Optional[str] = None
    cashaddr: Optional[str] = None

    def address_formats(self) -> list[tuple[str, object]]:
        """
        (kind, value) pairs that identify this network's current addresses. Base58 version bytes share one kind:
        a pubkeyhash byte on one network and a scripthash byte on another still collide.
        """
        formats = [("base58", version) for version in (self.pubkeyhash, self.scripthash) if version is not None]
        if self.bech32 is not None:
            formats.append(("bech32", self.bech32))
        if self.cashaddr is not None:
            formats.append(("cashaddr", self.cashaddr))
        return formats


@dataclass(frozen=True)
class LegacyAddressPrefix:
    """
    Prefixes a network used before it moved to its current ones. Addresses using them are still accepted and
    rewritten to the current format.
    """
    pubkeyhash: Optional[int] = None
    scripthash: Optional[int] = None


@dataclass(frozen=True)
class NetworkParameters:
    name: str
    magic: int
    supported_bips: tuple[int, ...]
    key_prefix: KeyPrefix
    address_prefix: AddressPrefix
    legacy_address_prefix: LegacyAddressPrefix = field(default_factory=LegacyAddressPrefix)
    forks: tuple[str, ...] = ()

    def __post_init__(self):
        if not self.supported_bips:
            raise ValueError(f"Network {self.name} must support at least one BIP format")

    @property
    def default_format(self) -> str:
        """The lowest-numbered BIP format this network supports"""
        return f"bip{min(self.supported_bips)}"

    def supports(self, bip: int) -> bool:
        return bip in self.supported_bips
