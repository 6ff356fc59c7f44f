"""
Helpers shared by the tests
"""
from pathlib import Path

from bitforks.plugin import LocalFolder

__all__ = ["KNOWN_PHRASE", "fixed_random", "CountingFolder", "BrokenFolder"]

KNOWN_PHRASE = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"


def fixed_random(byte: int = 0x00):
    """
    A host random source returning the same byte n times
    """

    def _random(n: int) -> bytes:
        return bytes([byte]) * n

    return _random


class CountingFolder(LocalFolder):
    """
    LocalFolder that records every read, for checking how often the cache is loaded
    """

    def __init__(self, path: Path):
        super().__init__(path)
        self.reads: list[str] = []

    async def read_text(self, name: str) -> str:
        self.reads.append(name)
        return await super().read_text(name)


class BrokenFolder(LocalFolder):
    """
    LocalFolder whose reads of the given files fail with an OSError
    """

    def __init__(self, path: Path, broken: tuple[str, ...]):
        super().__init__(path)
        self.broken = broken

    async def read_text(self, name: str) -> str:
        if name in self.broken:
            raise PermissionError(f"Permission denied: {name}")
        return await super().read_text(name)
