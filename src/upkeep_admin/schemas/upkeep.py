"""Normalized upkeep record."""

from __future__ import annotations

from pydantic import Field

from .base import Address, HexBytes, SchemaBase, Uint32, Uint64, Uint96, ZERO_ADDRESS


class UpkeepRecord(SchemaBase):
    """Generation-independent view of one upkeep.

    ``execute_gas`` holds the gas limit regardless of whether the registry
    reports it as ``executeGas`` (1.x, 2.0) or ``performGas`` (2.1).
    """

    target: Address = Field(default=ZERO_ADDRESS)
    execute_gas: Uint32 = Field(default=0)
    check_data: HexBytes = Field(default=b"")
    balance: Uint96 = Field(default=0)
    admin: Address = Field(default=ZERO_ADDRESS)
    max_valid_blocknumber: Uint64 = Field(default=0)
    amount_spent: Uint96 = Field(default=0)
    paused: bool = Field(default=False)
