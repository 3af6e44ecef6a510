"""Classification of self-reported typeAndVersion strings.

Strings are matched exactly against closed tables; nothing is parsed. A
string missing from the table is an error, never a guess at the nearest
generation.
"""

from __future__ import annotations

from typing import Dict, Type, Union

from .exceptions import UnsupportedRegistrarVersion, UnsupportedRegistryVersion
from .schemas import ProtocolGeneration

REGISTRY_VERSIONS: Dict[str, ProtocolGeneration] = {
    "KeeperRegistry 1.0.0": ProtocolGeneration.GEN1_0,
    "KeeperRegistry 1.1.0": ProtocolGeneration.GEN1_0,
    "KeeperRegistry 1.2.0": ProtocolGeneration.GEN1_0,
    "KeeperRegistry 1.3.0": ProtocolGeneration.GEN1_0,
    "KeeperRegistry 2.0.0": ProtocolGeneration.GEN2_0,
    "KeeperRegistry 2.0.1": ProtocolGeneration.GEN2_0,
    "KeeperRegistry 2.0.2": ProtocolGeneration.GEN2_0,
    "KeeperRegistry 2.1.0": ProtocolGeneration.GEN2_1,
}

# The 1.2-era registrar reports 1.1.0 on chain.
REGISTRAR_VERSIONS: Dict[str, ProtocolGeneration] = {
    "KeeperRegistrar 1.1.0": ProtocolGeneration.GEN1_0,
    "KeeperRegistrar 1.2.0": ProtocolGeneration.GEN1_0,
    "KeeperRegistrar 2.0.0": ProtocolGeneration.GEN2_0,
    "KeeperRegistrar 2.1.0": ProtocolGeneration.GEN2_1,
    "AutomationRegistrar 2.1.0": ProtocolGeneration.GEN2_1,
}


class VersionResolver:
    """Maps version strings to generations using one classification table."""

    def __init__(
        self,
        table: Dict[str, ProtocolGeneration],
        error: Union[Type[UnsupportedRegistryVersion], Type[UnsupportedRegistrarVersion]],
    ):
        self._table = dict(table)
        self._error = error

    def resolve(self, version: str) -> ProtocolGeneration:
        generation = self._table.get(version)
        if generation is None:
            raise self._error(version)
        return generation

    def is_gen1_0(self, version: str) -> bool:
        return self.resolve(version) is ProtocolGeneration.GEN1_0

    def is_gen2_0(self, version: str) -> bool:
        return self.resolve(version) is ProtocolGeneration.GEN2_0

    def is_gen2_1(self, version: str) -> bool:
        return self.resolve(version) is ProtocolGeneration.GEN2_1


registry_resolver = VersionResolver(REGISTRY_VERSIONS, UnsupportedRegistryVersion)
registrar_resolver = VersionResolver(REGISTRAR_VERSIONS, UnsupportedRegistrarVersion)


def resolve(version: str) -> ProtocolGeneration:
    """Classify a registry typeAndVersion string."""
    return registry_resolver.resolve(version)


def resolve_registrar(version: str) -> ProtocolGeneration:
    """Classify a registrar typeAndVersion string."""
    return registrar_resolver.resolve(version)


__all__ = [
    "REGISTRY_VERSIONS",
    "REGISTRAR_VERSIONS",
    "VersionResolver",
    "registry_resolver",
    "registrar_resolver",
    "resolve",
    "resolve_registrar",
]
