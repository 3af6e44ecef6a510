"""Runtime adapters for deployed registry and registrar services."""

from .broadcaster import Broadcaster, Signer, StaticSigner
from .registrar_adapter import RegistrarAdapter
from .registrar_config_adapter import RegistrarConfigAdapter
from .registry_adapter import RegistryAdapter
from .state_aggregator import StateAggregator

__all__ = [
    "Broadcaster",
    "Signer",
    "StaticSigner",
    "RegistrarAdapter",
    "RegistrarConfigAdapter",
    "RegistryAdapter",
    "StateAggregator",
]
