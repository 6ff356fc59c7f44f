"""
Static currency metadata for each plugin in the family
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

__all__ = ["Denomination", "CurrencyInfo", "EngineInfo", "CurrencyPluginSettings", "WalletInfo", "ALL_INFO",
           "info_for"]


@dataclass(frozen=True)
class Denomination:
    name: str
    multiplier: str
    symbol: str = ""


@dataclass(frozen=True)
class CurrencyInfo:
    plugin_name: str
    currency_code: str
    display_name: str
    denominations: tuple[Denomination, ...]
    default_settings: dict = field(default_factory=dict)
    uri_prefix: Optional[str] = None

    @property
    def wallet_type(self) -> str:
        return f"wallet:{self.plugin_name}"

    @property
    def scheme(self) -> str:
        return self.uri_prefix or self.plugin_name

    @property
    def multiplier(self) -> str:
        """The multiplier of the denomination named after the currency code"""
        for denomination in self.denominations:
            if denomination.name == self.currency_code:
                return denomination.multiplier
        return self.denominations[0].multiplier


@dataclass(frozen=True)
class EngineInfo:
    network: str
    # Callable building the wallet engine; CurrencyEngine when None
    engine_factory: Optional[Callable[..., Any]] = None


@dataclass(frozen=True)
class CurrencyPluginSettings:
    currency_info: CurrencyInfo
    engine_info: EngineInfo


@dataclass
class WalletInfo:
    id: str
    type: str
    keys: dict = field(default_factory=dict)


def _settings(*servers: str) -> dict:
    return {
        "electrumServers": list(servers),
        "disableFetchingServers": False,
        "customFeeSettings": ["satPerByte"],
    }


def _info(plugin_name: str, currency_code: str, display_name: str, symbol: str,
          servers: tuple[str, ...]) -> CurrencyPluginSettings:
    denominations = (
        Denomination(currency_code, "100000000", symbol),
        Denomination(f"m{currency_code}", "100000", f"m{symbol}"),
    )
    return CurrencyPluginSettings(
        currency_info=CurrencyInfo(plugin_name, currency_code, display_name, denominations, _settings(*servers)),
        engine_info=EngineInfo(network=plugin_name),
    )


ALL_INFO: list[CurrencyPluginSettings] = [
    _info("bitcoin", "BTC", "Bitcoin", "₿", ("electrums://electrum.blockstream.info:50002",)),
    _info("bitcointestnet", "TESTBTC", "Bitcoin Testnet", "₿", ("electrums://electrum.blockstream.info:60002",)),
    _info("litecoin", "LTC", "Litecoin", "Ł", ("electrums://electrum-ltc.bysh.me:50002",)),
    _info("bitcoincash", "BCH", "Bitcoin Cash", "₿", ("electrums://bch.imaginary.cash:50002",)),
    _info("bitcoingold", "BTG", "Bitcoin Gold", "₿", ()),
    _info("dogecoin", "DOGE", "Dogecoin", "Ð", ()),
    _info("dash", "DASH", "Dash", "D", ()),
]


def info_for(plugin_name: str) -> CurrencyPluginSettings:
    for info in ALL_INFO:
        if info.currency_info.plugin_name == plugin_name:
            return info
    raise KeyError(plugin_name)
