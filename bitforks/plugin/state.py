"""
PluginState - the cache shared by a plugin's tools object and every engine built from it.

Two files are kept per plugin: the header cache (current height and headers by height) and the server cache
(known electrum servers with a health score). Either file may be missing or unreadable; that cache starts empty
unless the host declared the file required.
"""
import asyncio
import json
import time
from types import MappingProxyType
from typing import Any, Mapping, Optional

from bitforks.core import CACHE, CacheLoadError, CacheSaveError
from bitforks.core.config import CACHE_SAVE_DELAY
from bitforks.plugin.io import PluginIo

__all__ = ["PluginState"]

HEADERS = CACHE.HEADERS
SERVERS = CACHE.SERVERS


class PluginState:

    def __init__(self,
                 io: PluginIo,
                 files: Optional[dict[str, str]] = None,
                 default_settings: Optional[dict] = None,
                 currency_code: str = "",
                 plugin_name: str = "",
                 required_files: tuple[str, ...] = (),
                 save_delay: float = CACHE_SAVE_DELAY,
                 ):
        self.io = io
        self.log = io.log
        self.files = {**CACHE.FILES, **(files or {})}
        self.default_settings = dict(default_settings or {})
        self.currency_code = currency_code
        self.plugin_name = plugin_name
        self.required_files = frozenset(required_files)
        self.save_delay = save_delay
        self.loaded = False

        self._settings: dict = dict(self.default_settings)
        self._height = 0
        self._headers: dict[int, Any] = {}
        self._servers: dict[str, dict] = {}
        self._engines: list = []

        self._locks = {key: asyncio.Lock() for key in self.files}
        self._dirty = {key: False for key in self.files}
        self._pending: dict[str, asyncio.Task] = {}

    # --- LOAD --- #

    async def load(self) -> None:
        self._load_headers(await self._read_json(HEADERS))
        self._load_servers(await self._read_json(SERVERS))
        self.apply_settings(self.io.settings)
        if not self._servers:
            self._seed_servers()
        self.loaded = True
        self.log.info(f"Loaded {self.plugin_name} cache: height {self._height}, {len(self._headers)} headers, "
                      f"{len(self._servers)} servers")

    async def _read_json(self, key: str) -> dict:
        name = self.files[key]
        required = key in self.required_files
        try:
            text = await self.io.storage.read_text(name)
        except FileNotFoundError:
            if required:
                raise CacheLoadError(f"Required cache file {name} is missing") from None
            self.log.info(f"No {name} for {self.plugin_name}, starting with an empty cache")
            return {}
        except OSError as e:
            if required:
                raise CacheLoadError(f"Failed to read required cache file {name}: {e}") from e
            self.log.warning(f"Failed to read {name}, starting with an empty cache: {e}")
            return {}
        except UnicodeDecodeError as e:
            if required:
                raise CacheLoadError(f"Required cache file {name} is not UTF-8: {e}") from e
            self.log.warning(f"Undecodable {name}, starting with an empty cache: {e}")
            return {}

        try:
            data = json.loads(text)
            if not isinstance(data, dict):
                raise ValueError(f"expected an object, got {type(data).__name__}")
        except ValueError as e:
            if required:
                raise CacheLoadError(f"Required cache file {name} is corrupt: {e}") from e
            self.log.warning(f"Corrupt {name}, starting with an empty cache: {e}")
            return {}
        return data

    def _load_headers(self, data: dict) -> None:
        height = data.get("height", 0)
        headers = data.get("headers", {})
        if not isinstance(height, int) or not isinstance(headers, dict):
            self.log.warning(f"Ignoring malformed header cache for {self.plugin_name}")
            return

        self._height = height
        self._headers = {}
        for key, header in headers.items():
            try:
                self._headers[int(key)] = header
            except ValueError:
                self.log.debug(f"Skipping header with non-numeric height {key!r}")

    def _load_servers(self, data: dict) -> None:
        servers = data.get("servers", {})
        if not isinstance(servers, dict):
            self.log.warning(f"Ignoring malformed server cache for {self.plugin_name}")
            return

        self._servers = {}
        for url, entry in servers.items():
            entry = entry if isinstance(entry, dict) else {}
            score = entry.get("score", 0)
            self._servers[url] = {
                "score": score if isinstance(score, int) else 0,
                "latency": entry.get("latency"),
                "lastSeen": entry.get("lastSeen"),
            }

    def _seed_servers(self) -> None:
        for url in self._settings.get(CACHE.SERVER_SETTING, []):
            self._servers.setdefault(url, {"score": 0, "latency": None, "lastSeen": None})

    # --- SETTINGS --- #

    def apply_settings(self, overrides: Optional[Mapping]) -> None:
        """
        Overlay host overrides onto the default settings. Keys without a default are ignored
        """
        overrides = overrides or {}
        ignored = [key for key in overrides if key not in self.default_settings]
        if ignored:
            self.log.debug(f"Ignoring unknown settings for {self.plugin_name}: {ignored}")
        self._settings = {
            **self.default_settings,
            **{key: value for key, value in overrides.items() if key in self.default_settings}
        }

    @property
    def settings(self) -> Mapping:
        return MappingProxyType(self._settings)

    # --- HEADERS --- #

    @property
    def height(self) -> int:
        return self._height

    def update_height(self, height: int) -> None:
        if height <= self._height:
            return
        self._height = height
        self._mark_dirty(HEADERS)
        for engine in list(self._engines):
            engine.on_height_changed(height)

    def get_header(self, height: int) -> Optional[Any]:
        return self._headers.get(height)

    def put_header(self, height: int, header: Any) -> None:
        """
        Store a header. Raw bytes are kept as hex so the cache stays JSON
        """
        if isinstance(header, (bytes, bytearray)):
            header = bytes(header).hex()
        self._headers[height] = header
        self._mark_dirty(HEADERS)

    # --- SERVERS --- #

    def get_servers(self) -> list[str]:
        """
        Known servers, best score first. Ties keep the order they were added in
        """
        return sorted(self._servers, key=lambda url: -self._servers[url]["score"])

    def put_servers(self, servers: list[str]) -> None:
        known = self._servers
        self._servers = {url: known.get(url, {"score": 0, "latency": None, "lastSeen": None}) for url in servers}
        self._mark_dirty(SERVERS)

    def server_score_up(self, url: str, latency: Optional[float] = None) -> None:
        entry = self._servers.setdefault(url, {"score": 0, "latency": None, "lastSeen": None})
        entry["score"] += CACHE.SCORE_UP
        entry["lastSeen"] = time.time()
        if latency is not None:
            entry["latency"] = latency
        self._mark_dirty(SERVERS)

    def server_score_down(self, url: str) -> None:
        entry = self._servers.get(url)
        if entry is None:
            return
        entry["score"] = max(CACHE.MIN_SCORE, entry["score"] + CACHE.SCORE_DOWN)
        self._mark_dirty(SERVERS)

    # --- ENGINES --- #

    def add_engine(self, engine) -> None:
        if engine not in self._engines:
            self._engines.append(engine)

    def remove_engine(self, engine) -> None:
        if engine in self._engines:
            self._engines.remove(engine)

    @property
    def engines(self) -> list:
        return list(self._engines)

    # --- PERSISTENCE --- #

    def _mark_dirty(self, key: str) -> None:
        self._dirty[key] = True
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No event loop: the next explicit save() flushes it
            return
        task = self._pending.get(key)
        if task is None or task.done():
            self._pending[key] = loop.create_task(self._deferred_save(key))

    async def _deferred_save(self, key: str) -> None:
        await asyncio.sleep(self.save_delay)
        self._pending.pop(key, None)
        try:
            await self._save_file(key)
        except Exception as e:
            # Nothing awaits this task
            self.log.exception(f"Deferred save of {self.files[key]} failed: {e}")

    def _snapshot(self, key: str) -> str:
        if key == HEADERS:
            data = {
                "height": self._height,
                "headers": {str(height): self._headers[height] for height in sorted(self._headers)},
            }
        else:
            data = {"servers": {url: dict(entry) for url, entry in self._servers.items()}}
        return json.dumps(data)

    async def _save_file(self, key: str) -> None:
        name = self.files[key]
        try:
            text = self._snapshot(key)
        except (TypeError, ValueError) as e:
            raise CacheSaveError(f"Cannot serialize {name}: {e}") from e
        self._dirty[key] = False
        async with self._locks[key]:
            try:
                await self.io.storage.write_text(name, text)
            except OSError as e:
                self._dirty[key] = True
                raise CacheSaveError(f"Failed to write {name}: {e}") from e
        self.log.debug(f"Saved {name} for {self.plugin_name}")

    async def save_headers(self) -> None:
        await self._save_file(HEADERS)

    async def save_servers(self) -> None:
        await self._save_file(SERVERS)

    async def save(self) -> None:
        await self.save_headers()
        await self.save_servers()

    def is_dirty(self, key: Optional[str] = None) -> bool:
        if key is None:
            return any(self._dirty.values())
        return self._dirty[key]

    async def shutdown(self) -> None:
        """
        Cancel pending deferred saves and flush everything
        """
        pending = [task for task in self._pending.values() if not task.done()]
        self._pending.clear()
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        await self.save()

    async def clear_cache(self) -> None:
        self._height = 0
        self._headers = {}
        self._servers = {}
        self._seed_servers()
        await self.save()

    def dump_data(self) -> dict:
        return {
            "pluginName": self.plugin_name,
            "currencyCode": self.currency_code,
            "height": self._height,
            "headers": len(self._headers),
            "servers": [{"url": url, **self._servers[url]} for url in self.get_servers()],
            "settings": dict(self._settings),
        }
