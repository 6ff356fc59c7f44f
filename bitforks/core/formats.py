"""
The protocol formats and constants
"""
from typing import Final

__all__ = ["WALLET", "XKEYS", "CACHE", "URI"]


class WALLET:
    """
    We provide a Mnemonic dictionary which is BIP39 compliant. This forces the Mnemonic to be of a certain size
    depending on the entropy byte length chosen
    """
    MNEMONIC: Final[dict] = {
        16: {"bit_length": 128, "word_count": 12, "checksum_bits": 4},
        20: {"bit_length": 160, "word_count": 15, "checksum_bits": 5},
        24: {"bit_length": 192, "word_count": 18, "checksum_bits": 6},
        28: {"bit_length": 224, "word_count": 21, "checksum_bits": 7},
        32: {"bit_length": 256, "word_count": 24, "checksum_bits": 8},
    }
    PRIVATE_KEY_ENTROPY: Final[int] = 32
    WORD_BITS: Final[int] = 11
    BITLEN_KEY: Final[str] = "bit_length"
    WORD_KEY: Final[str] = "word_count"
    CHECKSUM_KEY: Final[str] = "checksum_bits"
    SEED_ITERATIONS: Final[int] = 2048
    DKLEN: Final[int] = 64
    DEFAULT_SPLIT_FORMAT: Final[str] = "bip32"
    WALLET_TYPE_PREFIX: Final[str] = "wallet:"
    KEY_SUFFIX: Final[str] = "Key"
    XPUB_SUFFIX: Final[str] = "Xpub"


class XKEYS:
    """
    Constants related to the extended public and private keys
    """
    SEED_KEY: Final[bytes] = b'Bitcoin seed'
    CHAIN_LENGTH: Final[int] = 32
    SERIAL_LENGTH: Final[int] = 78
    MAX_DEPTH: Final[int] = 255

    # Hardened derivation threshold
    HARDENED_OFFSET: Final[int] = 0x80000000
    MAX_INDEX: Final[int] = 0xffffffff


class CACHE:
    """
    Plugin cache file names and persistence timing
    """
    HEADERS: Final[str] = "headers"
    SERVERS: Final[str] = "serverCache"
    FILES: Final[dict] = {HEADERS: "headers.json", SERVERS: "serverCache.json"}
    SAVE_DELAY: Final[float] = 5.0
    SERVER_SETTING: Final[str] = "electrumServers"
    SCORE_UP: Final[int] = 1
    SCORE_DOWN: Final[int] = -10
    MIN_SCORE: Final[int] = -100


class URI:
    """
    BIP21 query parameter names
    """
    AMOUNT: Final[str] = "amount"
    LABEL: Final[str] = "label"
    MESSAGE: Final[str] = "message"
