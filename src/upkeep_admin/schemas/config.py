"""Adapter configuration and resolved-version schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from .base import Address, FrozenSchema, SchemaBase
from .generation import ProtocolGeneration


class AdapterConfig(SchemaBase):
    """Addresses and settings for one adapter instance.

    Attributes:
        registry_address: Deployed KeeperRegistry
        link_token_address: Funding token implementing transferAndCall
        registrar_address: Registrar override; when unset it is read from
            the registry's aggregate state config
        cron_factory_address: CronUpkeepFactory used by time-based registration
    """

    registry_address: Address
    link_token_address: Address
    registrar_address: Optional[Address] = Field(default=None)
    cron_factory_address: Optional[Address] = Field(default=None)


class ResolvedVersions(FrozenSchema):
    """Registry and registrar classification, fixed at adapter construction."""

    registry_version: str
    registry_generation: ProtocolGeneration
    registrar_address: Address
    registrar_version: str
    registrar_generation: ProtocolGeneration
