"""
The default wallet engine.

Synchronization with remote servers lives outside this package; CurrencyEngine carries the part every engine
shares: it checks the wallet's keys against its network, binds to the plugin cache and follows the block height.
"""
from typing import Optional

from bitforks.core import CacheLoadError, ExtendedKeyError, InvalidKeyName
from bitforks.networks import NETWORKS, NetworkRegistry
from bitforks.plugin.info import EngineInfo, WalletInfo
from bitforks.plugin.io import PluginIo
from bitforks.plugin.state import PluginState
from bitforks.wallet import ExtendedKey, derive_account_xpub, derive_address, derive_xpub, wallet_format, xpub_name

__all__ = ["CurrencyEngine"]


class CurrencyEngine:

    def __init__(self,
                 wallet_info: WalletInfo,
                 engine_info: EngineInfo,
                 plugin_state: PluginState,
                 io: PluginIo,
                 options: Optional[dict] = None,
                 registry: NetworkRegistry = NETWORKS,
                 ):
        self.wallet_info = wallet_info
        self.engine_info = engine_info
        self.plugin_state = plugin_state
        self.io = io
        self.log = io.log
        self.options = options or {}
        self.network = engine_info.network
        self.network_info = registry.lookup(self.network)
        self.registry = registry

        self.keys: dict = dict(wallet_info.keys or {})
        self.account_xpub: Optional[str] = None
        self.block_height = 0
        self.running = False

    async def load(self) -> None:
        if not self.plugin_state.loaded:
            raise CacheLoadError(f"Plugin cache for {self.network} is not loaded")
        if self.wallet_info.type != f"wallet:{self.network}":
            raise InvalidKeyName(f"Wallet type {self.wallet_info.type} does not belong to {self.network}")

        if not self.keys.get(xpub_name(self.network)):
            self.keys = await derive_xpub(self.keys, self.network, self.io.crypto, self.registry)
        try:
            ExtendedKey.from_string(self.keys[xpub_name(self.network)], self.network_info)
        except ExtendedKeyError as e:
            raise InvalidKeyName(f"Stored {xpub_name(self.network)} is not a {self.network} key: {e}") from e

        self.account_xpub = await derive_account_xpub(self.keys, self.network, self.io.crypto,
                                                      registry=self.registry)
        self.block_height = self.plugin_state.height
        self.plugin_state.add_engine(self)
        self.running = True
        self.log.info(f"Loaded engine for wallet {self.wallet_info.id}")

    def get_block_height(self) -> int:
        return self.block_height

    def on_height_changed(self, height: int) -> None:
        self.block_height = height
        callback = self.options.get("on_block_height_changed")
        if callback is not None:
            callback(height)

    async def get_receive_address(self, index: int = 0, change: int = 0) -> str:
        if self.account_xpub is None:
            raise InvalidKeyName("Engine is not loaded")
        fmt = wallet_format(self.keys, self.network_info).format
        return await derive_address(self.account_xpub, self.network, fmt, self.io.crypto, change=change,
                                    index=index, registry=self.registry)

    async def kill_engine(self) -> None:
        self.running = False
        self.plugin_state.remove_engine(self)
        await self.plugin_state.save()
