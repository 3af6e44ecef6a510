"""Aggregate registry state as a tagged union over protocol generations.

Each generation's ``getState()`` returns a differently shaped record. The
``RegistryState`` union carries a ``generation`` tag and exactly one populated
variant; the variants of the other generations stay zero-valued. Build it with
``RegistryState.from_variant`` rather than by setting fields by hand.
"""

from __future__ import annotations

from typing import List

from pydantic import Field, model_validator

from .base import Address, Bytes32, Uint8, Uint32, Uint96, Uint256, ZeroValued, ZERO_ADDRESS
from .generation import ProtocolGeneration

_EMPTY_DIGEST = b"\x00" * 32


class KeeperStateV1(ZeroValued):
    nonce: Uint32 = 0
    owner_link_balance: Uint96 = 0
    expected_link_balance: Uint256 = 0
    num_upkeeps: Uint256 = 0


class KeeperConfigV1(ZeroValued):
    payment_premium_ppb: Uint32 = 0
    flat_fee_micro_link: Uint32 = 0
    block_count_per_turn: int = Field(default=0, ge=0)
    check_gas_limit: Uint32 = 0
    staleness_seconds: int = Field(default=0, ge=0)
    gas_ceiling_multiplier: int = Field(default=0, ge=0)
    min_upkeep_spend: Uint96 = 0
    max_perform_gas: Uint32 = 0
    fallback_gas_price: Uint256 = 0
    fallback_link_price: Uint256 = 0
    transcoder: Address = ZERO_ADDRESS
    registrar: Address = ZERO_ADDRESS


class KeeperStateV2(ZeroValued):
    """Registry state record, identical in 2.0 and 2.1."""

    nonce: Uint32 = 0
    owner_link_balance: Uint96 = 0
    expected_link_balance: Uint256 = 0
    total_premium: Uint96 = 0
    num_upkeeps: Uint256 = 0
    config_count: Uint32 = 0
    latest_config_block_number: Uint32 = 0
    latest_config_digest: Bytes32 = _EMPTY_DIGEST
    latest_epoch: Uint32 = 0
    paused: bool = False


class OnchainConfigV2_0(ZeroValued):
    payment_premium_ppb: Uint32 = 0
    flat_fee_micro_link: Uint32 = 0
    check_gas_limit: Uint32 = 0
    staleness_seconds: int = Field(default=0, ge=0)
    gas_ceiling_multiplier: int = Field(default=0, ge=0)
    min_upkeep_spend: Uint96 = 0
    max_perform_gas: Uint32 = 0
    max_check_data_size: Uint32 = 0
    max_perform_data_size: Uint32 = 0
    fallback_gas_price: Uint256 = 0
    fallback_link_price: Uint256 = 0
    transcoder: Address = ZERO_ADDRESS
    registrar: Address = ZERO_ADDRESS


class OnchainConfigV2_1(ZeroValued):
    payment_premium_ppb: Uint32 = 0
    flat_fee_micro_link: Uint32 = 0
    check_gas_limit: Uint32 = 0
    staleness_seconds: int = Field(default=0, ge=0)
    gas_ceiling_multiplier: int = Field(default=0, ge=0)
    min_upkeep_spend: Uint96 = 0
    max_perform_gas: Uint32 = 0
    max_check_data_size: Uint32 = 0
    max_perform_data_size: Uint32 = 0
    max_revert_data_size: Uint32 = 0
    fallback_gas_price: Uint256 = 0
    fallback_link_price: Uint256 = 0
    transcoder: Address = ZERO_ADDRESS
    registrars: List[Address] = Field(default_factory=list)
    upkeep_privilege_manager: Address = ZERO_ADDRESS


class StateV1_0(ZeroValued):
    """Legacy 1.x state: keeper list instead of a consensus signer set."""

    state: KeeperStateV1 = Field(default_factory=KeeperStateV1)
    config: KeeperConfigV1 = Field(default_factory=KeeperConfigV1)
    keepers: List[Address] = Field(default_factory=list)


class StateV2_0(ZeroValued):
    state: KeeperStateV2 = Field(default_factory=KeeperStateV2)
    config: OnchainConfigV2_0 = Field(default_factory=OnchainConfigV2_0)
    signers: List[Address] = Field(default_factory=list)
    transmitters: List[Address] = Field(default_factory=list)
    f: Uint8 = 0


class StateV2_1(ZeroValued):
    state: KeeperStateV2 = Field(default_factory=KeeperStateV2)
    config: OnchainConfigV2_1 = Field(default_factory=OnchainConfigV2_1)
    signers: List[Address] = Field(default_factory=list)
    transmitters: List[Address] = Field(default_factory=list)
    f: Uint8 = 0


_VARIANT_FIELDS = {
    ProtocolGeneration.GEN1_0: ("state_v1_0", StateV1_0),
    ProtocolGeneration.GEN2_0: ("state_v2_0", StateV2_0),
    ProtocolGeneration.GEN2_1: ("state_v2_1", StateV2_1),
}


class RegistryState(ZeroValued):
    """Tagged union of the per-generation ``getState()`` results."""

    generation: ProtocolGeneration = ProtocolGeneration.GEN1_0
    state_v1_0: StateV1_0 = Field(default_factory=StateV1_0)
    state_v2_0: StateV2_0 = Field(default_factory=StateV2_0)
    state_v2_1: StateV2_1 = Field(default_factory=StateV2_1)

    @model_validator(mode="after")
    def _only_tagged_variant_populated(self) -> "RegistryState":
        for generation, (field_name, _) in _VARIANT_FIELDS.items():
            if generation == self.generation:
                continue
            if not getattr(self, field_name).is_zero():
                raise ValueError(
                    f"{field_name} must be zero-valued for generation {self.generation.value}"
                )
        return self

    @classmethod
    def from_variant(cls, generation: ProtocolGeneration, variant: ZeroValued) -> "RegistryState":
        """Build the union with ``variant`` in the slot matching ``generation``."""
        field_name, variant_type = _VARIANT_FIELDS[generation]
        if not isinstance(variant, variant_type):
            raise TypeError(
                f"generation {generation.value} expects {variant_type.__name__}, "
                f"got {type(variant).__name__}"
            )
        return cls(generation=generation, **{field_name: variant})

    def variant(self) -> ZeroValued:
        """Return the populated variant."""
        field_name, _ = _VARIANT_FIELDS[self.generation]
        return getattr(self, field_name)
