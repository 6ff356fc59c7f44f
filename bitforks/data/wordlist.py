"""
Loads a given wordlist
"""
from functools import lru_cache

from mnemonic import Mnemonic as _Bip39

__all__ = ["load_wordlist"]


@lru_cache(maxsize=None)
def load_wordlist(language: str = "english") -> tuple[str, ...]:
    """Return the BIP39 wordlist as a tuple of strings."""
    return tuple(_Bip39(language).wordlist)
