"""Event log schema for records returned by the broadcaster."""

from __future__ import annotations

from typing import List

from pydantic import Field

from .base import Address, HexBytes, SchemaBase, ZERO_ADDRESS


class EventLog(SchemaBase):
    """One log emitted during an atomic call.

    ``topics[0]`` is the event signature hash for non-anonymous events;
    indexed arguments follow in declaration order.
    """

    address: Address = Field(default=ZERO_ADDRESS)
    topics: List[HexBytes] = Field(default_factory=list)
    data: HexBytes = Field(default=b"")
