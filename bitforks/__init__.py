"""
bitforks - shared HD wallet core for a family of Bitcoin-derived currency plugins
"""
from bitforks.plugin import make_core_plugins, make_currency_plugin_factory

__all__ = ["make_core_plugins", "make_currency_plugin_factory"]
