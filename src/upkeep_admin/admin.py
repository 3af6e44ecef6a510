"""UpkeepAdmin facade.

Resolves the registry and registrar generations once, at construction, and
exposes every administrative operation without the caller needing to know
which generation is deployed.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from . import abi
from .config_loader import load_adapter_config
from .exceptions import ConfigurationError, UnsupportedRegistryVersion
from .runtime import (
    Broadcaster,
    RegistrarAdapter,
    RegistrarConfigAdapter,
    RegistryAdapter,
    Signer,
    StateAggregator,
)
from .schemas import (
    ZERO_ADDRESS,
    AdapterConfig,
    EventLog,
    PendingRequest,
    ProtocolGeneration,
    RegistrationConfig,
    RegistrationRequest,
    RegistryState,
    ResolvedVersions,
    TriggerKind,
    UpkeepRecord,
)
from .version_resolver import registrar_resolver, registry_resolver

logger = logging.getLogger(__name__)


def read_type_and_version(broadcaster: Broadcaster, address: str) -> str:
    raw = broadcaster.call(address, abi.TYPE_AND_VERSION.encode_call())
    (version,) = abi.TYPE_AND_VERSION.decode_output(raw)
    return version


def registrar_from_state(state: RegistryState) -> str:
    """Return the registrar address recorded in the registry's config."""
    if state.generation is ProtocolGeneration.GEN1_0:
        registrar = state.state_v1_0.config.registrar
    elif state.generation is ProtocolGeneration.GEN2_0:
        registrar = state.state_v2_0.config.registrar
    elif state.generation is ProtocolGeneration.GEN2_1:
        registrars = state.state_v2_1.config.registrars
        registrar = registrars[0] if registrars else ZERO_ADDRESS
    else:
        raise UnsupportedRegistryVersion()
    if registrar == ZERO_ADDRESS:
        raise ConfigurationError("Registry config has no registrar; set registrar_address explicitly")
    return registrar


class UpkeepAdmin:
    """Administrative adapter for one registry/registrar pair."""

    def __init__(self, config: AdapterConfig, broadcaster: Broadcaster, signer: Signer):
        self.config = config
        self.broadcaster = broadcaster
        self.signer = signer

        registry_version = read_type_and_version(broadcaster, config.registry_address)
        registry_generation = registry_resolver.resolve(registry_version)
        logger.info("Registry %s reports %r", config.registry_address, registry_version)

        self.state_aggregator = StateAggregator(broadcaster, config.registry_address, registry_generation)
        registrar_address = config.registrar_address
        if registrar_address is None:
            registrar_address = registrar_from_state(self.state_aggregator.get_state())

        registrar_version = read_type_and_version(broadcaster, registrar_address)
        registrar_generation = registrar_resolver.resolve(registrar_version)
        logger.info("Registrar %s reports %r", registrar_address, registrar_version)

        self.versions = ResolvedVersions(
            registry_version=registry_version,
            registry_generation=registry_generation,
            registrar_address=registrar_address,
            registrar_version=registrar_version,
            registrar_generation=registrar_generation,
        )

        self.registry = RegistryAdapter(broadcaster, config.registry_address, registry_generation)
        self.registrar = RegistrarAdapter(
            broadcaster,
            signer,
            registrar_address,
            config.link_token_address,
            registrar_generation,
            cron_factory_address=config.cron_factory_address,
        )
        self.registrar_config = RegistrarConfigAdapter(broadcaster, registrar_address, registrar_generation)

    @classmethod
    def from_config_dir(cls, config_dir: str, broadcaster: Broadcaster, signer: Signer) -> "UpkeepAdmin":
        return cls(load_adapter_config(config_dir), broadcaster, signer)

    # Registrar

    def register_condition_or_custom(self, request: RegistrationRequest) -> bytes:
        return self.registrar.register_condition_or_custom(request)

    def register_log_trigger(self, request: RegistrationRequest) -> bytes:
        return self.registrar.register_log_trigger(request)

    def register_time_based(self, request: RegistrationRequest, handler: bytes, cron_expression: str) -> bytes:
        return self.registrar.register_time_based(request, handler, cron_expression)

    def get_pending_request(self, request_hash: bytes) -> PendingRequest:
        return self.registrar.get_pending_request(request_hash)

    def cancel_request(self, request_hash: bytes) -> List[EventLog]:
        return self.registrar.cancel_request(request_hash)

    def get_registration_config(self, trigger_type: Optional[TriggerKind] = None) -> RegistrationConfig:
        return self.registrar_config.get_registration_config(trigger_type)

    # Registry

    def add_funds(self, upkeep_id: int, amount: int) -> List[EventLog]:
        return self.registry.add_funds(upkeep_id, amount)

    def pause_upkeep(self, upkeep_id: int) -> List[EventLog]:
        return self.registry.pause_upkeep(upkeep_id)

    def unpause_upkeep(self, upkeep_id: int) -> List[EventLog]:
        return self.registry.unpause_upkeep(upkeep_id)

    def cancel_upkeep(self, upkeep_id: int) -> List[EventLog]:
        return self.registry.cancel_upkeep(upkeep_id)

    def set_upkeep_gas_limit(self, upkeep_id: int, gas_limit: int) -> List[EventLog]:
        return self.registry.set_upkeep_gas_limit(upkeep_id, gas_limit)

    def withdraw_funds(self, upkeep_id: int, to: str) -> List[EventLog]:
        return self.registry.withdraw_funds(upkeep_id, to)

    def transfer_upkeep_admin(self, upkeep_id: int, proposed: str) -> List[EventLog]:
        return self.registry.transfer_upkeep_admin(upkeep_id, proposed)

    def accept_upkeep_admin(self, upkeep_id: int) -> List[EventLog]:
        return self.registry.accept_upkeep_admin(upkeep_id)

    def get_min_balance_for_upkeep(self, upkeep_id: int) -> int:
        return self.registry.get_min_balance_for_upkeep(upkeep_id)

    def get_active_upkeep_ids(self, start_index: int, max_count: int) -> List[int]:
        return self.registry.get_active_upkeep_ids(start_index, max_count)

    def get_upkeep(self, upkeep_id: int) -> UpkeepRecord:
        return self.registry.get_upkeep(upkeep_id)

    def get_upkeep_transcoder_version(self) -> int:
        return self.registry.get_upkeep_transcoder_version()

    def get_state(self) -> RegistryState:
        return self.state_aggregator.get_state()
