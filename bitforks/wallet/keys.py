"""
Key derivation for wallet key material.

Wallet keys are a plain mapping owned by the host wallet record: "<network>Key" holds the seed (a BIP39 phrase or
a hex seed), "<network>Xpub" the master extended public key, plus the optional "format" and "coinType" tags.
Functions here only read that mapping and return new ones; they never mutate it.
"""
import string
from typing import Callable, Optional

from bitforks.core import (InvalidKeyName, MissingKey, UnsupportedFormat, WALLET, WalletError)
from bitforks.crypto import CryptoProvider
from bitforks.networks import NETWORKS, NetworkParameters, NetworkRegistry
from bitforks.wallet.derivation import DerivationPath, parse_format
from bitforks.wallet.mnemonic import Mnemonic
from bitforks.wallet.xkeys import ExtendedKey

__all__ = ["KeyStrategy", "register_strategy", "strategy_for", "key_name", "xpub_name", "wallet_format",
           "create_private_key", "seed_to_hex", "derive_xpub", "derive_account_xpub", "derive_address",
           "splittable_wallet_types"]

WalletKeys = dict


def key_name(network_id: str) -> str:
    return f"{network_id}{WALLET.KEY_SUFFIX}"


def xpub_name(network_id: str) -> str:
    return f"{network_id}{WALLET.XPUB_SUFFIX}"


def _is_hex(text: str) -> bool:
    return bool(text) and len(text) % 2 == 0 and all(c in string.hexdigits for c in text)


class KeyStrategy:
    """
    How a network turns entropy into a stored seed and a stored seed into a BIP32 master key. The default covers
    every BIP39 network; a coin with its own scheme registers a subclass with register_strategy.
    """

    def seed_from_entropy(self, entropy: bytes) -> str:
        return str(Mnemonic.from_entropy(entropy))

    async def seed_to_hex(self, seed: str, crypto: CryptoProvider) -> str:
        seed = seed.strip()
        if _is_hex(seed):
            return seed.lower()
        try:
            mnemonic = Mnemonic.from_string(seed)
        except WalletError as e:
            raise InvalidKeyName(f"Seed is neither a valid mnemonic nor hex: {e}") from e
        return (await mnemonic.to_seed(crypto)).hex()

    def master_key(self, hex_seed: str) -> ExtendedKey:
        return ExtendedKey.from_master_seed(bytes.fromhex(hex_seed))


DEFAULT_STRATEGY = KeyStrategy()
_STRATEGIES: dict[str, KeyStrategy] = {}


def register_strategy(network_id: str, strategy: KeyStrategy) -> None:
    _STRATEGIES[network_id] = strategy


def strategy_for(network_id: str) -> KeyStrategy:
    return _STRATEGIES.get(network_id, DEFAULT_STRATEGY)


# --- HELPERS --- #

def wallet_format(keys: WalletKeys, params: NetworkParameters) -> DerivationPath:
    """
    The derivation path for a wallet's format tag, defaulting to the network's lowest supported BIP
    """
    fmt = keys.get("format") or params.default_format
    bip = parse_format(fmt)
    if not params.supports(bip):
        raise UnsupportedFormat(f"Network {params.name} does not support {fmt}")
    return DerivationPath.from_format(fmt)


async def _master_key(keys: WalletKeys, network_id: str, crypto: CryptoProvider) -> ExtendedKey:
    if keys is None:
        raise InvalidKeyName("Wallet has no keys")
    seed = keys.get(key_name(network_id)) or ""
    if not seed.strip():
        raise MissingKey(f"Wallet keys have no {key_name(network_id)}")
    strategy = strategy_for(network_id)
    hex_seed = await strategy.seed_to_hex(seed, crypto)
    return strategy.master_key(hex_seed)


# --- OPERATIONS --- #

def create_private_key(random: Callable[[int], bytes], network_id: str, options: Optional[dict] = None,
                       registry: NetworkRegistry = NETWORKS) -> WalletKeys:
    """
    Draw fresh entropy from the host's random source and return the new wallet's key bundle
    """
    options = options or {}
    params = registry.lookup(network_id)

    fmt = options.get("format") or params.default_format
    path = DerivationPath.from_format(fmt)
    if not params.supports(path.purpose):
        raise UnsupportedFormat(f"Network {network_id} does not support {fmt}")
    coin_type = options.get("coinType", params.key_prefix.coin_type)

    entropy = bytes(random(WALLET.PRIVATE_KEY_ENTROPY))
    if len(entropy) != WALLET.PRIVATE_KEY_ENTROPY:
        raise WalletError(f"Random source returned {len(entropy)} bytes, expected {WALLET.PRIVATE_KEY_ENTROPY}")

    return {
        key_name(network_id): strategy_for(network_id).seed_from_entropy(entropy),
        "format": path.format,
        "coinType": coin_type,
    }


async def seed_to_hex(seed: str, crypto: CryptoProvider) -> str:
    return await DEFAULT_STRATEGY.seed_to_hex(seed, crypto)


async def derive_xpub(keys: WalletKeys, network_id: str, crypto: CryptoProvider,
                      registry: NetworkRegistry = NETWORKS) -> WalletKeys:
    """
    Return a copy of keys with the master "<network>Xpub" added.

    An xpub already in keys is never replaced: if it doesn't match the seed the keys are rejected.
    """
    params = registry.lookup(network_id)
    master = await _master_key(keys, network_id, crypto)
    xpub = (await master.get_pubkey(crypto)).to_string(params)

    existing = keys.get(xpub_name(network_id))
    if existing and existing != xpub:
        raise InvalidKeyName(f"Stored {xpub_name(network_id)} does not match the wallet seed")
    return {**keys, xpub_name(network_id): xpub}


async def derive_account_xpub(keys: WalletKeys, network_id: str, crypto: CryptoProvider, account: int = 0,
                              registry: NetworkRegistry = NETWORKS) -> str:
    """
    Return the account-level xpub along the wallet format's derivation path
    """
    params = registry.lookup(network_id)
    if keys is None:
        raise InvalidKeyName("Wallet has no keys")
    path = wallet_format(keys, params)
    coin_type = keys.get("coinType", params.key_prefix.coin_type)

    master = await _master_key(keys, network_id, crypto)
    account_key = await master.derive_path(path.path(coin_type, account), crypto)
    return (await account_key.get_pubkey(crypto)).to_string(params)


async def derive_address(xpub: str, network_id: str, fmt: str, crypto: CryptoProvider, change: int = 0,
                         index: int = 0, registry: NetworkRegistry = NETWORKS) -> str:
    """
    Derive the address at change/index below an account xpub
    """
    params = registry.lookup(network_id)
    path = DerivationPath.from_format(fmt)
    if not params.supports(path.purpose):
        raise UnsupportedFormat(f"Network {network_id} does not support {fmt}")

    account_key = ExtendedKey.from_string(xpub, params)
    child = await account_key.derive_path(f"m/{change}/{index}", crypto)
    return path.address(await child.public_key(crypto), params)


def splittable_wallet_types(keys: WalletKeys, network_id: str, registry: NetworkRegistry = NETWORKS) -> list[str]:
    """
    The wallet types a wallet's seed can be split into: one per fork network that accepts the wallet's format
    """
    fmt = (keys or {}).get("format") or WALLET.DEFAULT_SPLIT_FORMAT
    bip = parse_format(fmt)
    return [f"{WALLET.WALLET_TYPE_PREFIX}{fork}" for fork in registry.forks_supporting_format(network_id, bip)]
