"""
CurrencyTools - the wallet-independent half of a currency plugin
"""
from typing import Optional

from bitforks.core import InvalidKeyName
from bitforks.networks import NETWORKS, NetworkRegistry
from bitforks.plugin.info import CurrencyPluginSettings, WalletInfo
from bitforks.plugin.io import PluginIo
from bitforks.plugin.state import PluginState
from bitforks.plugin.uri import PaymentRequest, encode_uri, parse_uri
from bitforks.wallet import create_private_key, derive_xpub, splittable_wallet_types

__all__ = ["CurrencyTools"]


class CurrencyTools:
    """
    Provides information about the currency, as well as generic (non-wallet) functionality.
    Owns the plugin's PluginState; engines share it by reference.
    """

    def __init__(self, io: PluginIo, settings: CurrencyPluginSettings, registry: NetworkRegistry = NETWORKS):
        self.currency_info = settings.currency_info
        self.plugin_name = self.currency_info.plugin_name
        self.io = io
        self.log = io.log
        self.log.info(f"Creating Currency Plugin for {self.plugin_name}")

        self.network = settings.engine_info.network
        self.registry = registry
        self.network_info = registry.lookup(self.network)
        self.state = PluginState(
            io,
            default_settings=self.currency_info.default_settings,
            currency_code=self.currency_info.currency_code,
            plugin_name=self.plugin_name,
            required_files=io.required_cache_files,
        )

    async def create_private_key(self, wallet_type: str, opts: Optional[dict] = None) -> dict:
        if wallet_type != self.currency_info.wallet_type:
            raise InvalidKeyName(f"{self.plugin_name} cannot create keys for {wallet_type}")
        return create_private_key(self.io.random, self.network, opts, self.registry)

    async def derive_public_key(self, wallet_info: WalletInfo) -> dict:
        # Public entry point intentionally yields nothing; internal_derive_public_key does the derivation
        return {}

    async def internal_derive_public_key(self, wallet_info: WalletInfo) -> dict:
        if not wallet_info.keys:
            raise InvalidKeyName(f"Wallet {wallet_info.id} has no keys")
        return await derive_xpub(wallet_info.keys, self.network, self.io.crypto, self.registry)

    async def parse_uri(self, uri: str) -> PaymentRequest:
        return parse_uri(uri, self.network, self.currency_info, self.registry)

    async def encode_uri(self, request: PaymentRequest) -> str:
        return encode_uri(request, self.network, self.currency_info, self.registry)

    def get_splittable_types(self, wallet_info: WalletInfo) -> list[str]:
        return splittable_wallet_types(wallet_info.keys, self.network, self.registry)
