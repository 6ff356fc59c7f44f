"""
The Mnemonic class - the BIP39 phrase a wallet's seed is stored as. Built from entropy or from an existing phrase
"""
import unicodedata

from bitforks.core import WALLET, WalletError
from bitforks.crypto import CryptoProvider, sha256
from bitforks.data import load_wordlist

__all__ = ["Mnemonic"]

# --- CONSTANTS --- #
ALLOWED_ENTROPY_BYTELEN = WALLET.MNEMONIC.keys()
CHECKSUM_KEY = WALLET.CHECKSUM_KEY
WORD_KEY = WALLET.WORD_KEY
WORD_BITS = WALLET.WORD_BITS


def _checksum_from_entropy(entropy: bytes) -> int:
    """
    Return the integer associated with the checksum for the given entropy
    """
    entropy_hash_int = int.from_bytes(sha256(entropy), "big")
    shift = 256 - WALLET.MNEMONIC[len(entropy)][CHECKSUM_KEY]  # SHA256 generates 256 bit hash
    return entropy_hash_int >> shift


class Mnemonic:
    __slots__ = ("phrase",)

    def __init__(self, phrase: list[str]):
        """
        A validated BIP39 phrase. Raises WalletError if the word count or checksum is wrong.
        """
        if not self.validate_phrase(phrase):
            raise WalletError(f"Given phrase doesn't pass checksum validation ({len(phrase)} words)")
        self.phrase = list(phrase)

    @classmethod
    def from_entropy(cls, entropy: bytes) -> "Mnemonic":
        # --- BIP39 ENTROPY BYTE LENGTH VALIDATION --- #
        if len(entropy) not in ALLOWED_ENTROPY_BYTELEN:
            raise WalletError(
                f"Entropy byte length {len(entropy)} not BIP39 compliant. Must be one of {list(ALLOWED_ENTROPY_BYTELEN)}")

        # Shift entropy_int by checksum_bitlen then OR the checksum_int to append it (as an integer)
        checksum_bitlen = WALLET.MNEMONIC[len(entropy)][CHECKSUM_KEY]
        ent_check = (int.from_bytes(entropy, "big") << checksum_bitlen) | _checksum_from_entropy(entropy)

        word_count = WALLET.MNEMONIC[len(entropy)][WORD_KEY]
        wordlist = load_wordlist()
        phrase = []
        for _ in range(word_count):
            # Extract 11-bit groups from right to left
            word_index = ent_check & ((1 << WORD_BITS) - 1)
            phrase.insert(0, wordlist[word_index])
            ent_check >>= WORD_BITS

        return cls(phrase)

    @classmethod
    def from_string(cls, text: str) -> "Mnemonic":
        return cls(unicodedata.normalize("NFKD", text).split())

    @staticmethod
    def validate_phrase(phrase: list[str]) -> bool:
        """
        For a given mnemonic phrase, we validate the checksum according to BIP-39
        """
        # Find entropy_bytelen based on word_count
        entropy_bytelen = next(
            (bytelen for bytelen, fmt in WALLET.MNEMONIC.items() if fmt[WORD_KEY] == len(phrase)), None
        )
        if entropy_bytelen is None:
            return False

        wordlist = load_wordlist()
        checksum_bitlen = WALLET.MNEMONIC[entropy_bytelen][CHECKSUM_KEY]

        # Convert phrase to combined integer
        ent_check = 0
        for word in phrase:
            try:
                word_index = wordlist.index(word)
            except ValueError:
                return False  # Word not in wordlist
            ent_check = (ent_check << WORD_BITS) | word_index

        # Extract checksum and entropy
        checksum = ent_check & ((1 << checksum_bitlen) - 1)
        entropy = ent_check >> checksum_bitlen

        return _checksum_from_entropy(entropy.to_bytes(entropy_bytelen, "big")) == checksum

    async def to_seed(self, crypto: CryptoProvider, passphrase: str = "") -> bytes:
        """
        Returns seed value associated with mnemonic phrase of the object
        """
        password = unicodedata.normalize("NFKD", " ".join(self.phrase)).encode("utf-8")
        salt = ("mnemonic" + unicodedata.normalize("NFKD", passphrase)).encode("utf-8")
        return await crypto.pbkdf2(password, salt, WALLET.SEED_ITERATIONS, WALLET.DKLEN)

    def __str__(self):
        return " ".join(self.phrase)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mnemonic):
            return False
        return self.phrase == other.phrase
