"""
The crypto provider interface.

The host runtime supplies the secp256k1 and PBKDF2 primitives; key derivation only ever calls them through a
CryptoProvider. EcdsaCryptoProvider is the default used when the host doesn't bring its own.
"""
import hashlib
from abc import ABC, abstractmethod

from ecdsa import SECP256k1, SigningKey, VerifyingKey
from ecdsa.ellipticcurve import INFINITY
from ecdsa.keys import MalformedPointError

from bitforks.core import CryptoError

__all__ = ["CryptoProvider", "EcdsaCryptoProvider"]

CURVE_ORDER = SECP256k1.order


class CryptoProvider(ABC):
    """
    Elliptic curve and key-stretching primitives. All methods are coroutines so a provider may hand the work off
    to a native library or a worker.
    """

    @abstractmethod
    async def public_key_create(self, privkey: bytes) -> bytes:
        """Return the 33-byte compressed public key for a 32-byte private key"""
        raise NotImplementedError

    @abstractmethod
    async def private_key_tweak_add(self, privkey: bytes, tweak: bytes) -> bytes:
        """Return (privkey + tweak) mod n as 32 bytes"""
        raise NotImplementedError

    @abstractmethod
    async def public_key_tweak_add(self, pubkey: bytes, tweak: bytes) -> bytes:
        """Return the compressed point pubkey + tweak*G"""
        raise NotImplementedError

    @abstractmethod
    async def pbkdf2(self, password: bytes, salt: bytes, iterations: int, dklen: int) -> bytes:
        """PBKDF2-HMAC-SHA512"""
        raise NotImplementedError


def _scalar(data: bytes, name: str) -> int:
    if len(data) != 32:
        raise CryptoError(f"{name} must be 32 bytes")
    value = int.from_bytes(data, "big")
    if value >= CURVE_ORDER:
        raise CryptoError(f"{name} is not less than the curve order")
    return value


class EcdsaCryptoProvider(CryptoProvider):
    """
    Default provider backed by the ecdsa library and hashlib
    """

    async def public_key_create(self, privkey: bytes) -> bytes:
        if _scalar(privkey, "Private key") == 0:
            raise CryptoError("Private key is zero")
        signing_key = SigningKey.from_string(privkey, curve=SECP256k1)
        return signing_key.get_verifying_key().to_string("compressed")

    async def private_key_tweak_add(self, privkey: bytes, tweak: bytes) -> bytes:
        child = (_scalar(privkey, "Private key") + _scalar(tweak, "Tweak")) % CURVE_ORDER
        if child == 0:
            raise CryptoError("Tweaked private key is zero")
        return child.to_bytes(32, "big")

    async def public_key_tweak_add(self, pubkey: bytes, tweak: bytes) -> bytes:
        tweak_int = _scalar(tweak, "Tweak")
        try:
            parent = VerifyingKey.from_string(pubkey, curve=SECP256k1)
        except MalformedPointError as e:
            raise CryptoError(f"Invalid public key: {e}") from e

        point = parent.pubkey.point + SECP256k1.generator * tweak_int
        if point == INFINITY:
            raise CryptoError("Tweaked public key is the point at infinity")
        child = VerifyingKey.from_public_point(point.to_affine(), curve=SECP256k1)
        return child.to_string("compressed")

    async def pbkdf2(self, password: bytes, salt: bytes, iterations: int, dklen: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha512", password, salt, iterations, dklen)
