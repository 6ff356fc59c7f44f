"""
Static parameters for every supported network
"""
from bitforks.networks.params import AddressPrefix, KeyPrefix, LegacyAddressPrefix, NetworkParameters
from bitforks.networks.registry import NetworkRegistry

__all__ = ["NETWORK_DEFINITIONS", "NETWORKS"]

# Standard BIP32 mainnet version bytes, shared by most forks
_XPUB = 0x0488b21e
_XPRV = 0x0488ade4

NETWORK_DEFINITIONS: dict[str, NetworkParameters] = {
    "bitcoin": NetworkParameters(
        name="bitcoin",
        magic=0xd9b4bef9,
        supported_bips=(84, 49, 44, 32),
        key_prefix=KeyPrefix(privkey=0x80, xpubkey=_XPUB, xprivkey=_XPRV, xpubkey58="xpub", xprivkey58="xprv",
                             coin_type=0),
        address_prefix=AddressPrefix(pubkeyhash=0x00, scripthash=0x05, witnesspubkeyhash=0x06,
                                     witnessscripthash=0x0a, bech32="bc"),
        forks=("bitcoincash", "bitcoingold"),
    ),
    "bitcointestnet": NetworkParameters(
        name="bitcointestnet",
        magic=0x0709110b,
        supported_bips=(84, 49, 44, 32),
        key_prefix=KeyPrefix(privkey=0xef, xpubkey=0x043587cf, xprivkey=0x04358394, xpubkey58="tpub",
                             xprivkey58="tprv", coin_type=1),
        address_prefix=AddressPrefix(pubkeyhash=0x6f, scripthash=0xc4, witnesspubkeyhash=0x03,
                                     witnessscripthash=0x28, bech32="tb"),
    ),
    "litecoin": NetworkParameters(
        name="litecoin",
        magic=0xd9b4bef9,
        supported_bips=(84, 49),
        key_prefix=KeyPrefix(privkey=0xb0, xpubkey=_XPUB, xprivkey=_XPRV, xpubkey58="xpub", xprivkey58="xprv",
                             coin_type=2),
        address_prefix=AddressPrefix(pubkeyhash=0x30, scripthash=0x32, witnesspubkeyhash=0x06,
                                     witnessscripthash=0x0a, bech32="lc"),
        legacy_address_prefix=LegacyAddressPrefix(scripthash=0x05),
    ),
    "bitcoincash": NetworkParameters(
        name="bitcoincash",
        magic=0xe8f3e1e3,
        supported_bips=(44, 32),
        key_prefix=KeyPrefix(privkey=0x80, xpubkey=_XPUB, xprivkey=_XPRV, xpubkey58="xpub", xprivkey58="xprv",
                             coin_type=145),
        address_prefix=AddressPrefix(cashaddr="bitcoincash"),
        legacy_address_prefix=LegacyAddressPrefix(pubkeyhash=0x00, scripthash=0x05),
    ),
    "bitcoingold": NetworkParameters(
        name="bitcoingold",
        magic=0x446d47e1,
        supported_bips=(84, 49, 44, 32),
        key_prefix=KeyPrefix(privkey=0x80, xpubkey=_XPUB, xprivkey=_XPRV, xpubkey58="xpub", xprivkey58="xprv",
                             coin_type=156),
        address_prefix=AddressPrefix(pubkeyhash=0x26, scripthash=0x17, witnesspubkeyhash=0x06,
                                     witnessscripthash=0x0a, bech32="btg"),
    ),
    "dogecoin": NetworkParameters(
        name="dogecoin",
        magic=0xc0c0c0c0,
        supported_bips=(44, 32),
        key_prefix=KeyPrefix(privkey=0x9e, xpubkey=0x02facafd, xprivkey=0x02fac398, xpubkey58="dgub",
                             xprivkey58="dgpv", coin_type=3),
        address_prefix=AddressPrefix(pubkeyhash=0x1e, scripthash=0x16),
    ),
    "dash": NetworkParameters(
        name="dash",
        magic=0xbd6b0cbf,
        supported_bips=(44, 32),
        key_prefix=KeyPrefix(privkey=0xcc, xpubkey=_XPUB, xprivkey=_XPRV, xpubkey58="xpub", xprivkey58="xprv",
                             coin_type=5),
        address_prefix=AddressPrefix(pubkeyhash=0x4c, scripthash=0x10),
    ),
}

NETWORKS = NetworkRegistry(NETWORK_DEFINITIONS).freeze()
