"""
Fixtures used in the tests
"""
import pytest

from bitforks.core import get_logger
from bitforks.crypto import EcdsaCryptoProvider
from bitforks.plugin import PluginIo
from tests.utility import CountingFolder, fixed_random


@pytest.fixture()
def crypto():
    return EcdsaCryptoProvider()


@pytest.fixture()
def folder(tmp_path):
    return CountingFolder(tmp_path / "plugin")


@pytest.fixture()
def make_io(folder, crypto):
    """
    Returns a builder for PluginIo bound to the test folder
    """

    def _make_io(**kwargs) -> PluginIo:
        kwargs.setdefault("storage", folder)
        kwargs.setdefault("crypto", crypto)
        kwargs.setdefault("random", fixed_random())
        kwargs.setdefault("log", get_logger("bitforks.tests", "DEBUG"))
        return PluginIo(**kwargs)

    return _make_io
