"""
Plugin construction.

Each plugin instance builds its CurrencyTools (and loads the cache) at most once. Every wallet engine is built on
top of those tools and shares their PluginState.
"""
import asyncio
from enum import Enum, auto
from typing import Awaitable, Callable, Optional

from bitforks.networks import NETWORKS, NetworkRegistry
from bitforks.plugin.engine import CurrencyEngine
from bitforks.plugin.info import ALL_INFO, CurrencyPluginSettings, WalletInfo
from bitforks.plugin.io import PluginIo, make_default_io
from bitforks.plugin.tools import CurrencyTools

__all__ = ["ToolsState", "ToolsHandle", "CurrencyPlugin", "make_currency_plugin_factory", "make_core_plugins"]


class ToolsState(Enum):
    NOT_STARTED = auto()
    IN_FLIGHT = auto()
    READY = auto()


class ToolsHandle:
    """
    Once-initialized handle around an async builder.

    Callers arriving while the build is in flight await the same future. A failed build is raised to every
    waiter and the handle returns to NOT_STARTED, so the next caller starts over.
    """

    def __init__(self, build: Callable[[], Awaitable[CurrencyTools]]):
        self._build = build
        self._future: Optional[asyncio.Future] = None
        self.state = ToolsState.NOT_STARTED

    async def get(self) -> CurrencyTools:
        if self._future is None:
            self.state = ToolsState.IN_FLIGHT
            self._future = asyncio.ensure_future(self._run())
        # A caller giving up must not cancel the shared build
        return await asyncio.shield(self._future)

    async def _run(self) -> CurrencyTools:
        try:
            tools = await self._build()
        except BaseException:
            self._future = None
            self.state = ToolsState.NOT_STARTED
            raise
        self.state = ToolsState.READY
        return tools

    @property
    def ready(self) -> bool:
        return self.state is ToolsState.READY

    def result(self) -> CurrencyTools:
        return self._future.result()


class CurrencyPlugin:

    def __init__(self, settings: CurrencyPluginSettings, io: PluginIo, registry: NetworkRegistry = NETWORKS):
        self.settings = settings
        self.currency_info = settings.currency_info
        self.engine_info = settings.engine_info
        self.io = io
        self.registry = registry
        self.tools_handle = ToolsHandle(self._build_tools)

    async def _build_tools(self) -> CurrencyTools:
        tools = CurrencyTools(self.io, self.settings, self.registry)
        await tools.state.load()
        return tools

    async def make_currency_tools(self) -> CurrencyTools:
        return await self.tools_handle.get()

    async def make_currency_engine(self, wallet_info: WalletInfo, options: Optional[dict] = None):
        tools = await self.make_currency_tools()
        engine_factory = self.engine_info.engine_factory or CurrencyEngine
        engine = engine_factory(
            wallet_info=wallet_info,
            engine_info=self.engine_info,
            plugin_state=tools.state,
            io=self.io,
            options=options,
            registry=self.registry,
        )
        await engine.load()
        return engine

    async def close(self) -> None:
        """
        Flush the plugin cache before the host unloads the plugin
        """
        if self.tools_handle.ready:
            await self.tools_handle.result().state.shutdown()


def make_currency_plugin_factory(settings: CurrencyPluginSettings,
                                 make_io: Callable[[dict], PluginIo] = make_default_io,
                                 registry: NetworkRegistry = NETWORKS) -> Callable[..., CurrencyPlugin]:
    # Fail at startup, not on first use, when the network is unknown
    registry.lookup(settings.engine_info.network)

    def make_plugin(options: Optional[dict] = None) -> CurrencyPlugin:
        io = make_io({"plugin_name": settings.currency_info.plugin_name, **(options or {})})
        return CurrencyPlugin(settings, io, registry)

    return make_plugin


def make_core_plugins(make_io: Callable[[dict], PluginIo] = make_default_io,
                      infos: Optional[list[CurrencyPluginSettings]] = None,
                      registry: NetworkRegistry = NETWORKS) -> dict[str, Callable[..., CurrencyPlugin]]:
    out = {}
    for info in ALL_INFO if infos is None else infos:
        out[info.currency_info.plugin_name] = make_currency_plugin_factory(info, make_io, registry)
    return out
