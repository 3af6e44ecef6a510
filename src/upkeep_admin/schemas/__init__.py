"""Schema exports."""

from .base import (
    ZERO_ADDRESS,
    Address,
    Bytes32,
    FrozenSchema,
    HexBytes,
    SchemaBase,
    ZeroValued,
)
from .config import AdapterConfig, ResolvedVersions
from .event import EventLog
from .generation import AutoApproveType, ProtocolGeneration, RegistrationPath, TriggerKind
from .registration import PendingRequest, RegistrationConfig, RegistrationRequest
from .state import (
    KeeperConfigV1,
    KeeperStateV1,
    KeeperStateV2,
    OnchainConfigV2_0,
    OnchainConfigV2_1,
    RegistryState,
    StateV1_0,
    StateV2_0,
    StateV2_1,
)
from .upkeep import UpkeepRecord

__all__ = [
    "ZERO_ADDRESS",
    "Address",
    "Bytes32",
    "FrozenSchema",
    "HexBytes",
    "SchemaBase",
    "ZeroValued",
    "AdapterConfig",
    "ResolvedVersions",
    "EventLog",
    "AutoApproveType",
    "ProtocolGeneration",
    "RegistrationPath",
    "TriggerKind",
    "PendingRequest",
    "RegistrationConfig",
    "RegistrationRequest",
    "KeeperConfigV1",
    "KeeperStateV1",
    "KeeperStateV2",
    "OnchainConfigV2_0",
    "OnchainConfigV2_1",
    "RegistryState",
    "StateV1_0",
    "StateV2_0",
    "StateV2_1",
    "UpkeepRecord",
]
