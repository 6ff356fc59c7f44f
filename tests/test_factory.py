"""
Tests for plugin construction, the tools object and the default engine
"""
import asyncio

import pytest

from bitforks.core import CacheLoadError, InvalidKeyName
from bitforks.networks import NETWORKS
from bitforks.plugin import (EngineInfo, ToolsState, WalletInfo, info_for, make_core_plugins,
                            make_currency_plugin_factory)
from tests.utility import KNOWN_PHRASE

BIP84_ADDRESS = "bc1qcr8te4kr609gcawutmrza0j4xv80jy8z306fyu"


@pytest.fixture()
def make_plugin(make_io):
    def _make_plugin(plugin_name="bitcoin", **io_kwargs):
        factory = make_currency_plugin_factory(info_for(plugin_name), make_io=lambda options: make_io(**io_kwargs))
        return factory()

    return _make_plugin


def test_core_plugins():
    plugins = make_core_plugins()
    assert set(plugins) == set(NETWORKS)


@pytest.mark.asyncio
async def test_concurrent_tools_load_once(make_plugin, folder):
    plugin = make_plugin()
    results = await asyncio.gather(*[plugin.make_currency_tools() for _ in range(5)])
    assert all(tools is results[0] for tools in results)
    assert sorted(folder.reads) == ["headers.json", "serverCache.json"]
    assert plugin.tools_handle.state is ToolsState.READY

    # Later calls reuse the same tools
    assert await plugin.make_currency_tools() is results[0]
    assert len(folder.reads) == 2
    await plugin.close()


@pytest.mark.asyncio
async def test_failed_tools_load_is_retried(make_plugin, folder):
    plugin = make_plugin(required_cache_files=("headers",))
    results = await asyncio.gather(*[plugin.make_currency_tools() for _ in range(3)], return_exceptions=True)
    assert all(isinstance(result, CacheLoadError) for result in results)
    assert plugin.tools_handle.state is ToolsState.NOT_STARTED

    await folder.write_text("headers.json", '{"height": 3, "headers": {}}')
    tools = await plugin.make_currency_tools()
    assert tools.state.height == 3
    await plugin.close()


@pytest.mark.asyncio
async def test_tools_keys(make_plugin, crypto):
    plugin = make_plugin()
    tools = await plugin.make_currency_tools()

    keys = await tools.create_private_key("wallet:bitcoin", {"format": "bip84"})
    assert keys["format"] == "bip84"
    with pytest.raises(InvalidKeyName):
        await tools.create_private_key("wallet:litecoin")

    wallet_info = WalletInfo(id="w1", type="wallet:bitcoin", keys=keys)
    assert await tools.derive_public_key(wallet_info) == {}
    derived = await tools.internal_derive_public_key(wallet_info)
    assert derived["bitcoinXpub"].startswith("xpub")
    assert tools.get_splittable_types(wallet_info) == ["wallet:bitcoingold"]
    await plugin.close()


@pytest.mark.asyncio
async def test_engine(make_plugin):
    plugin = make_plugin()
    heights = []
    wallet_info = WalletInfo(id="w1", type="wallet:bitcoin", keys={"bitcoinKey": KNOWN_PHRASE, "format": "bip84"})
    engine = await plugin.make_currency_engine(wallet_info, {"on_block_height_changed": heights.append})

    assert engine.running
    assert engine.keys["bitcoinXpub"].startswith("xpub")
    assert await engine.get_receive_address() == BIP84_ADDRESS

    tools = await plugin.make_currency_tools()
    assert engine.plugin_state is tools.state
    tools.state.update_height(800000)
    assert engine.get_block_height() == 800000
    assert heights == [800000]

    await engine.kill_engine()
    assert not engine.running
    assert tools.state.engines == []
    await plugin.close()


@pytest.mark.asyncio
async def test_engine_wrong_wallet_type(make_plugin):
    plugin = make_plugin()
    wallet_info = WalletInfo(id="w2", type="wallet:litecoin", keys={"litecoinKey": KNOWN_PHRASE})
    with pytest.raises(InvalidKeyName):
        await plugin.make_currency_engine(wallet_info)
    await plugin.close()


def test_unknown_network_fails_early():
    settings = info_for("bitcoin")
    bad = type(settings)(settings.currency_info, type(settings.engine_info)(network="notacoin"))
    with pytest.raises(KeyError):
        make_currency_plugin_factory(bad)


@pytest.mark.asyncio
async def test_engine_not_built_when_cache_fails(make_io):
    built = []
    settings = info_for("bitcoin")
    settings = type(settings)(settings.currency_info,
                              EngineInfo(network="bitcoin", engine_factory=lambda **kwargs: built.append(kwargs)))
    factory = make_currency_plugin_factory(settings,
                                           make_io=lambda options: make_io(required_cache_files=("headers",)))
    plugin = factory()

    wallet_info = WalletInfo(id="w1", type="wallet:bitcoin", keys={"bitcoinKey": KNOWN_PHRASE})
    with pytest.raises(CacheLoadError):
        await plugin.make_currency_engine(wallet_info)
    assert built == []
    await plugin.close()
