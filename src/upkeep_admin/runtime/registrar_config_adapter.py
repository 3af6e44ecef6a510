"""Registrar auto-approval configuration reads."""

from __future__ import annotations

from typing import Optional

from upkeep_admin import abi
from upkeep_admin.exceptions import MissingTriggerType, UnsupportedRegistrarVersion
from upkeep_admin.schemas import AutoApproveType, ProtocolGeneration, RegistrationConfig, TriggerKind

from .broadcaster import Broadcaster


class RegistrarConfigAdapter:
    """Reads ``RegistrationConfig`` from a registrar of a known generation.

    2.1 registrars keep auto-approval settings per trigger type, so the
    trigger type is mandatory there and ignored everywhere else.
    """

    def __init__(self, broadcaster: Broadcaster, registrar_address: str, generation: ProtocolGeneration):
        self.broadcaster = broadcaster
        self.registrar_address = registrar_address
        self.generation = generation

    def _call(self, function: abi.ContractFunction, *args):
        raw = self.broadcaster.call(self.registrar_address, function.encode_call(*args))
        return function.decode_output(raw)

    def get_registration_config(self, trigger_type: Optional[TriggerKind] = None) -> RegistrationConfig:
        if trigger_type is None:
            return self._registration_config()
        return self._trigger_registration_config(trigger_type)

    def _registration_config(self) -> RegistrationConfig:
        if self.generation in (ProtocolGeneration.GEN1_0, ProtocolGeneration.GEN2_0):
            approve_type, max_allowed, approved_count, registry, min_juels = self._call(abi.GET_REGISTRATION_CONFIG)
            return RegistrationConfig(
                auto_approve_type=AutoApproveType(approve_type),
                auto_approve_max_allowed=max_allowed,
                approved_count=approved_count,
                registry=registry,
                min_link_juels=min_juels,
            )
        elif self.generation is ProtocolGeneration.GEN2_1:
            raise MissingTriggerType()
        else:
            raise UnsupportedRegistrarVersion()

    def _trigger_registration_config(self, trigger_type: TriggerKind) -> RegistrationConfig:
        if self.generation is ProtocolGeneration.GEN2_1:
            ((approve_type, max_allowed, approved_count),) = self._call(
                abi.GET_TRIGGER_REGISTRATION_DETAILS, TriggerKind(trigger_type).onchain_tag
            )
            registry, min_juels = self._call(abi.GET_REGISTRAR_CONFIG)
            return RegistrationConfig(
                auto_approve_type=AutoApproveType(approve_type),
                auto_approve_max_allowed=max_allowed,
                approved_count=approved_count,
                registry=registry,
                min_link_juels=min_juels,
            )
        elif self.generation in (ProtocolGeneration.GEN1_0, ProtocolGeneration.GEN2_0):
            return self._registration_config()
        else:
            raise UnsupportedRegistrarVersion()
