"""
The NetworkRegistry: an append-only table of NetworkParameters keyed by network id
"""
from typing import Iterator, Optional

from bitforks.core import AddressCollision, DuplicateNetwork, RegistryFrozen, UnknownNetwork
from bitforks.networks.params import NetworkParameters

__all__ = ["NetworkRegistry"]


class NetworkRegistry:
    """
    Networks are registered once at startup. After freeze() the registry is read-only and every fork reference
    is known to resolve.
    """

    def __init__(self, networks: Optional[dict[str, NetworkParameters]] = None):
        self._networks: dict[str, NetworkParameters] = {}
        self._frozen = False
        for network_id, params in (networks or {}).items():
            self.register(network_id, params)

    # --- REGISTRATION --- #

    def register(self, network_id: str, params: NetworkParameters) -> None:
        if self._frozen:
            raise RegistryFrozen(f"Cannot register {network_id}: registry is frozen")
        if network_id in self._networks:
            raise DuplicateNetwork(f"Network {network_id} is already registered")
        self._networks[network_id] = params

    def freeze(self) -> "NetworkRegistry":
        """
        Declare the registry ready. Every fork id must itself be registered, and no two networks may share a
        current address version byte or prefix. Legacy prefixes are exempt: they are only accepted and rewritten.
        """
        owners = {}
        for network_id, params in self._networks.items():
            for fork in params.forks:
                if fork not in self._networks:
                    raise UnknownNetwork(fork)
            for address_format in params.address_prefix.address_formats():
                owner = owners.setdefault(address_format, network_id)
                if owner != network_id:
                    kind, value = address_format
                    raise AddressCollision(f"{network_id} and {owner} share the {kind} address prefix {value!r}")
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    # --- LOOKUP --- #

    def lookup(self, network_id: str) -> NetworkParameters:
        try:
            return self._networks[network_id]
        except KeyError:
            raise UnknownNetwork(network_id) from None

    def get(self, network_id: str) -> Optional[NetworkParameters]:
        return self._networks.get(network_id)

    def forks_supporting_format(self, network_id: str, bip: int, include_origin: bool = False) -> list[str]:
        """
        Return the fork family members of network_id whose supported BIPs contain bip, in fork-list order.
        With include_origin the origin network leads the list when it supports bip itself.
        """
        params = self.lookup(network_id)
        candidates = [network_id, *params.forks] if include_origin else list(params.forks)

        members = []
        for candidate in candidates:
            fork_params = self.get(candidate)
            if fork_params is not None and fork_params.supports(bip) and candidate not in members:
                members.append(candidate)
        return members

    # --- OVERRIDES --- #

    def __contains__(self, network_id: str) -> bool:
        return network_id in self._networks

    def __iter__(self) -> Iterator[str]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)
