"""
The host capability bundle handed to every plugin: randomness, crypto, storage and logging
"""
import asyncio
import logging
import os
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from bitforks.core import get_logger
from bitforks.core.config import DATA_DIR
from bitforks.crypto import CryptoProvider, EcdsaCryptoProvider

__all__ = ["Storage", "LocalFolder", "atomic_write_text", "PluginIo", "make_default_io"]


class Storage(ABC):
    """
    A flat folder of named text files
    """

    @abstractmethod
    async def read_text(self, name: str) -> str:
        """Raise FileNotFoundError when the file doesn't exist"""
        raise NotImplementedError

    @abstractmethod
    async def write_text(self, name: str, text: str) -> None:
        """Replace the file. An interrupted write must leave the previous copy intact"""
        raise NotImplementedError

    @abstractmethod
    async def delete(self, name: str) -> None:
        raise NotImplementedError


def atomic_write_text(path: Path, text: str) -> None:
    """
    Write text to a temp file beside path, then os.replace it into place.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with temp_path.open("w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


class LocalFolder(Storage):
    """
    Storage on the local filesystem. Blocking file calls run in a worker thread.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def __repr__(self):
        return f"LocalFolder({str(self.path)!r})"

    def _file(self, name: str) -> Path:
        return self.path / name

    async def read_text(self, name: str) -> str:
        return await asyncio.to_thread(self._file(name).read_text, encoding="utf-8")

    async def write_text(self, name: str, text: str) -> None:
        await asyncio.to_thread(atomic_write_text, self._file(name), text)

    async def delete(self, name: str) -> None:
        await asyncio.to_thread(self._file(name).unlink, missing_ok=True)


@dataclass
class PluginIo:
    random: Callable[[int], bytes] = secrets.token_bytes
    crypto: CryptoProvider = field(default_factory=EcdsaCryptoProvider)
    storage: Storage = field(default_factory=lambda: LocalFolder(DATA_DIR))
    log: Optional[logging.Logger] = None
    # Host overrides for the currency's default settings
    settings: dict = field(default_factory=dict)
    # Cache files ("headers", "serverCache") whose absence fails the initial load
    required_cache_files: tuple[str, ...] = ()

    def __post_init__(self):
        if self.log is None:
            self.log = get_logger("bitforks")


def make_default_io(options: dict) -> PluginIo:
    """
    Host capabilities for running outside a wallet runtime: one data folder and logger per plugin
    """
    plugin_name = options["plugin_name"]
    return PluginIo(
        storage=LocalFolder(Path(options.get("data_dir", DATA_DIR)) / plugin_name),
        log=get_logger(f"bitforks.{plugin_name}"),
        settings=dict(options.get("settings", {})),
        required_cache_files=tuple(options.get("required_cache_files", ())),
    )
