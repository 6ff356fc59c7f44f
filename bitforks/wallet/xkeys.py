"""
Extended Keys (xpub/xprv) Implementation
Implements BIP32 Hierarchical Deterministic Wallet key derivation

Curve arithmetic is handed to the injected CryptoProvider; this module only does the HMAC chaining and the
serialization. Version bytes come from the network the key is serialized for.
"""

from bitforks.core import CryptoError, DataEncodingError, ExtendedKeyError, XKEYS
from bitforks.crypto import CryptoProvider, hash160, hmac_sha512
from bitforks.data import decode_base58check, encode_base58check
from bitforks.networks import NetworkParameters

__all__ = ["ExtendedKey", "parse_path"]

HARDENED_INDEX = XKEYS.HARDENED_OFFSET
SEED_KEY = XKEYS.SEED_KEY


def parse_path(path: str) -> list[int]:
    """
    Return the child indices for a path like m/44'/0'/0'. Hardened levels may be marked with ' or h
    """
    if not path.startswith('m'):
        raise ExtendedKeyError("Path must start with 'm'")

    indices = []
    for part in path.split('/')[1:]:
        if not part:
            continue
        hardened = part.endswith("'") or part.endswith("h")
        number = part[:-1] if hardened else part
        if not number.isdigit() or int(number) >= HARDENED_INDEX:
            raise ExtendedKeyError(f"Invalid path component {part!r} in {path}")
        indices.append(int(number) + HARDENED_INDEX if hardened else int(number))
    return indices


class ExtendedKey:
    """
    Base class for extended keys (xpub/xprv)
    """
    __slots__ = ('depth', 'parent_fingerprint', 'child_number', 'chain_code', 'key_data')

    def __init__(self,
                 key_data: bytes,
                 chain_code: bytes,
                 depth: int = 0,
                 parent_fingerprint: bytes = b'\x00' * 4,
                 child_number: int = 0,
                 ):
        """
        Initialize extended key

        Args:
            key_data: Key data (32 bytes for private, 33 bytes for public)
            chain_code: Chain code for key derivation (32 bytes)
            depth: Depth in the derivation path
            parent_fingerprint: Fingerprint of parent key (4 bytes)
            child_number: Child key index
        """
        # --- Validation --- #
        if len(key_data) not in (32, 33):
            raise ExtendedKeyError("Key data must be 32 (private) or 33 (public) bytes")
        if len(parent_fingerprint) != 4:
            raise ExtendedKeyError("Parent fingerprint must be 4 bytes")
        if len(chain_code) != XKEYS.CHAIN_LENGTH:
            raise ExtendedKeyError("Chain code must be 32 bytes")
        if not 0 <= depth <= XKEYS.MAX_DEPTH:
            raise ExtendedKeyError(f"Depth {depth} out of range")

        self.depth = depth
        self.parent_fingerprint = parent_fingerprint
        self.child_number = child_number
        self.chain_code = chain_code
        self.key_data = key_data

    # --- OVERRIDES --- #

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExtendedKey):
            return False
        return self._payload() == other._payload()

    def __hash__(self) -> int:
        return hash(self._payload())

    # --- CONSTRUCTORS --- #

    @classmethod
    def from_master_seed(cls, seed: bytes) -> "ExtendedKey":
        if not 16 <= len(seed) <= 64:
            raise ExtendedKeyError(f"Seed must be between 16 and 64 bytes, not {len(seed)}")

        # 1. Run the HMAC-512
        seed_hash = hmac_sha512(key=SEED_KEY, message=seed)

        # 2. Get private_key in bytes and chain code
        privkey, chain_code = seed_hash[:32], seed_hash[32:]
        if int.from_bytes(privkey, "big") == 0:
            raise ExtendedKeyError("Seed produces an invalid master key")

        return cls(privkey, chain_code)

    @classmethod
    def from_string(cls, text: str, params: NetworkParameters) -> "ExtendedKey":
        """
        Decode a serialized xpub/xprv. The version bytes must be the network's.
        """
        try:
            serial = decode_base58check(text)
        except DataEncodingError as e:
            raise ExtendedKeyError(f"Invalid extended key string: {e}") from e
        if len(serial) != XKEYS.SERIAL_LENGTH:
            raise ExtendedKeyError(f"Extended key must be {XKEYS.SERIAL_LENGTH} bytes, not {len(serial)}")

        version = serial[:4]
        depth = serial[4]
        parent_fingerprint = serial[5:9]
        child_number = int.from_bytes(serial[9:13], "big")
        chain_code = serial[13:45]
        key_data = serial[45:]

        if version == params.key_prefix.xprv_version:
            if key_data[0] != 0:
                raise ExtendedKeyError("Private extended key must have a zero pad byte")
            key_data = key_data[1:]
        elif version != params.key_prefix.xpub_version:
            raise ExtendedKeyError(f"Version bytes {version.hex()} don't belong to network {params.name}")

        return cls(key_data, chain_code, depth, parent_fingerprint, child_number)

    # --- PROPERTIES --- #
    @property
    def is_private(self) -> bool:
        return len(self.key_data) == 32

    @property
    def is_public(self) -> bool:
        return len(self.key_data) == 33

    # --- METHODS --- #

    def _payload(self) -> bytes:
        key_data = b'\x00' + self.key_data if self.is_private else self.key_data
        return b''.join([
            self.depth.to_bytes(1, "big"),
            self.parent_fingerprint,
            self.child_number.to_bytes(4, "big"),
            self.chain_code,
            key_data
        ])

    def to_bytes(self, params: NetworkParameters) -> bytes:
        """
        version || depth || parent fingerprint || index || chain code || key data
        """
        prefix = params.key_prefix
        version = prefix.xprv_version if self.is_private else prefix.xpub_version
        return version + self._payload()

    def to_string(self, params: NetworkParameters) -> str:
        return encode_base58check(self.to_bytes(params))

    async def public_key(self, crypto: CryptoProvider) -> bytes:
        if self.is_public:
            return self.key_data
        return await crypto.public_key_create(self.key_data)

    async def fingerprint(self, crypto: CryptoProvider) -> bytes:
        return hash160(await self.public_key(crypto))[:4]

    async def derive_child(self, index: int, crypto: CryptoProvider) -> "ExtendedKey":
        """
        Derive a child at the given index
        """
        if not 0 <= index <= XKEYS.MAX_INDEX:
            raise ExtendedKeyError(f"Child index {index} out of range")
        if self.depth == XKEYS.MAX_DEPTH:
            raise ExtendedKeyError("Maximum derivation depth reached")

        # --- Prepare data for HMAC --- #
        index_bytes = index.to_bytes(4, "big")
        if index >= HARDENED_INDEX:
            if self.is_public:
                raise ExtendedKeyError("Cannot derive hardened child from public key")
            data = b'\x00' + self.key_data + index_bytes
        else:
            data = await self.public_key(crypto) + index_bytes

        # --- HMAC SHA512 --- #
        key_hash = hmac_sha512(key=self.chain_code, message=data)
        tweak, child_chain_code = key_hash[:32], key_hash[32:]

        # Invalid tweak or resulting key: BIP32 moves on to the next index
        try:
            if self.is_private:
                child_key_data = await crypto.private_key_tweak_add(self.key_data, tweak)
            else:
                child_key_data = await crypto.public_key_tweak_add(self.key_data, tweak)
        except CryptoError:
            if index + 1 in (HARDENED_INDEX, XKEYS.MAX_INDEX + 1):
                raise
            return await self.derive_child(index + 1, crypto)

        return ExtendedKey(
            depth=self.depth + 1,
            parent_fingerprint=await self.fingerprint(crypto),
            child_number=index,
            chain_code=child_chain_code,
            key_data=child_key_data
        )

    async def derive_path(self, path: str, crypto: CryptoProvider) -> "ExtendedKey":
        key = self
        for index in parse_path(path):
            key = await key.derive_child(index, crypto)
        return key

    async def get_pubkey(self, crypto: CryptoProvider) -> "ExtendedKey":
        """
        Return the corresponding public ExtendedKey
        """
        if self.is_public:
            return self
        return ExtendedKey(
            key_data=await crypto.public_key_create(self.key_data),
            depth=self.depth,
            parent_fingerprint=self.parent_fingerprint,
            child_number=self.child_number,
            chain_code=self.chain_code,
        )
