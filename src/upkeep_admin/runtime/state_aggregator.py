"""Aggregate registry state read, wrapped in the ``RegistryState`` union."""

from __future__ import annotations

import logging
from typing import Any, Sequence, Type, TypeVar

from upkeep_admin import abi
from upkeep_admin.exceptions import UnsupportedRegistryVersion
from upkeep_admin.schemas import (
    KeeperConfigV1,
    KeeperStateV1,
    KeeperStateV2,
    OnchainConfigV2_0,
    OnchainConfigV2_1,
    ProtocolGeneration,
    RegistryState,
    StateV1_0,
    StateV2_0,
    StateV2_1,
)
from upkeep_admin.schemas.base import ZeroValued

from .broadcaster import Broadcaster

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=ZeroValued)


def _from_tuple(model: Type[ModelT], values: Sequence[Any]) -> ModelT:
    """Build ``model`` from an ABI tuple; fields are declared in ABI order."""
    names = list(model.model_fields)
    if len(names) != len(values):
        raise ValueError(f"{model.__name__} expects {len(names)} values, got {len(values)}")
    return model(**dict(zip(names, values)))


class StateAggregator:
    def __init__(self, broadcaster: Broadcaster, registry_address: str, generation: ProtocolGeneration):
        self.broadcaster = broadcaster
        self.registry_address = registry_address
        self.generation = generation

    def _read(self, function: abi.ContractFunction):
        raw = self.broadcaster.call(self.registry_address, function.encode_call())
        return function.decode_output(raw)

    def get_state(self) -> RegistryState:
        """Read ``getState()`` and populate only the variant for this generation."""
        if self.generation is ProtocolGeneration.GEN1_0:
            state, config, keepers = self._read(abi.GET_STATE_V1)
            variant = StateV1_0(
                state=_from_tuple(KeeperStateV1, state),
                config=_from_tuple(KeeperConfigV1, config),
                keepers=list(keepers),
            )
        elif self.generation is ProtocolGeneration.GEN2_0:
            state, config, signers, transmitters, f = self._read(abi.GET_STATE_V2_0)
            variant = StateV2_0(
                state=_from_tuple(KeeperStateV2, state),
                config=_from_tuple(OnchainConfigV2_0, config),
                signers=list(signers),
                transmitters=list(transmitters),
                f=f,
            )
        elif self.generation is ProtocolGeneration.GEN2_1:
            state, config, signers, transmitters, f = self._read(abi.GET_STATE_V2_1)
            variant = StateV2_1(
                state=_from_tuple(KeeperStateV2, state),
                config=_from_tuple(OnchainConfigV2_1, config),
                signers=list(signers),
                transmitters=list(transmitters),
                f=f,
            )
        else:
            raise UnsupportedRegistryVersion()

        logger.debug("Read registry state for generation %s", self.generation.value)
        return RegistryState.from_variant(self.generation, variant)
