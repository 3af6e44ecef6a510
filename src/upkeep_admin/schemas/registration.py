"""Registration request and registrar-side records."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from .base import Address, HexBytes, SchemaBase, Uint32, Uint96, Uint256, ZERO_ADDRESS
from .generation import AutoApproveType, TriggerKind


class RegistrationRequest(SchemaBase):
    """Caller-supplied fields for a registrar ``register`` call.

    Attributes:
        name: Display name of the upkeep
        encrypted_email: Contact info, opaque bytes
        upkeep_contract: Target account performing the work
        gas_limit: Gas budget for each perform
        admin_address: Account that will administer the upkeep; the
            submitting account when unset
        check_data: Opaque payload passed to the target's check function
        trigger_type: Trigger kind (only sent to 2.1 registrars)
        trigger_config: Opaque trigger payload, empty for condition triggers
        offchain_config: Opaque payload for the execution layer (2.x only)
        amount: Initial funding in Juels
    """

    name: str
    encrypted_email: HexBytes = Field(default=b"")
    upkeep_contract: Address
    gas_limit: Uint32
    admin_address: Optional[Address] = Field(default=None)
    check_data: HexBytes = Field(default=b"")
    trigger_type: TriggerKind = Field(default=TriggerKind.CONDITION)
    trigger_config: HexBytes = Field(default=b"")
    offchain_config: HexBytes = Field(default=b"")
    amount: Uint96


class PendingRequest(SchemaBase):
    """Registration awaiting approval, held by the registrar."""

    admin: Address = Field(default=ZERO_ADDRESS)
    balance: Uint96 = Field(default=0)


class RegistrationConfig(SchemaBase):
    """Registrar auto-approval policy plus the registry it forwards to."""

    auto_approve_type: AutoApproveType = Field(default=AutoApproveType.DISABLED)
    auto_approve_max_allowed: Uint32 = Field(default=0)
    approved_count: Uint32 = Field(default=0)
    registry: Address = Field(default=ZERO_ADDRESS)
    min_link_juels: Uint256 = Field(default=0)
