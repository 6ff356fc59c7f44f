"""
The custom exceptions used throughout bitforks
"""
__all__ = ["NetworkError", "UnknownNetwork", "DuplicateNetwork", "RegistryFrozen", "AddressCollision", "WalletError",
           "UnsupportedFormat", "InvalidKeyName", "MissingKey", "ExtendedKeyError", "CryptoError",
           "DataEncodingError", "UriError", "MalformedUri", "InvalidAddress", "CacheError", "CacheLoadError",
           "CacheSaveError"]


# --- NETWORKS --- #

class NetworkError(Exception):
    """
    Parent class for network registry errors
    """
    pass


class UnknownNetwork(NetworkError, KeyError):
    """
    For when a network id is not in the registry
    """

    def __init__(self, network_id: str):
        super().__init__(network_id)
        self.network_id = network_id

    def __str__(self):
        return f"Unknown network: {self.network_id}"


class DuplicateNetwork(NetworkError):
    """
    For when a network id is registered twice
    """
    pass


class RegistryFrozen(NetworkError):
    """
    For registration attempts after the registry has been declared ready
    """
    pass


class AddressCollision(NetworkError):
    """
    For two networks whose current address formats share a version byte or prefix
    """
    pass


# --- WALLET --- #

class WalletError(Exception):
    """
    Parent class for Wallet errors
    """
    pass


class UnsupportedFormat(WalletError):
    """
    For a wallet format the network does not support
    """
    pass


class InvalidKeyName(WalletError):
    """
    For wallet key material that can't be used for the requested network
    """
    pass


class MissingKey(InvalidKeyName):
    """
    For when the network-specific private seed field is absent or empty
    """
    pass


class ExtendedKeyError(WalletError):
    """Custom exception for extended key operations"""
    pass


class CryptoError(Exception):
    """
    Raised by crypto providers for out of bounds scalars or invalid points
    """
    pass


class DataEncodingError(Exception):
    """
    For use in encoding/decoding algorithms
    """
    pass


# --- URI --- #

class UriError(ValueError):
    """
    Parent class for payment URI errors
    """
    pass


class MalformedUri(UriError):
    """
    Scheme mismatch, missing address or unparsable amount
    """
    pass


class InvalidAddress(UriError):
    """
    For an address that fails the network's address-format validation
    """
    pass


# --- CACHE --- #

class CacheError(Exception):
    """
    Parent class for plugin cache errors
    """
    pass


class CacheLoadError(CacheError):
    """
    For a required cache file that is missing or can't be read
    """
    pass


class CacheSaveError(CacheError):
    """
    For a failed cache flush. The previous on-disk copy is left intact
    """
    pass
