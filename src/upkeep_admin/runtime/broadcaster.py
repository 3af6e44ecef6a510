"""Collaborator protocols for talking to deployed services.

Signing, nonce handling, gas pricing, timeouts and network retries live behind
these seams; the adapter only encodes calls and decodes what comes back.
"""

from __future__ import annotations

from typing import List, Protocol

from eth_utils import to_checksum_address

from upkeep_admin.schemas import EventLog


class Broadcaster(Protocol):
    """Executes calls against deployed services."""

    def call(self, to: str, data: bytes) -> bytes:
        """Run a read-only call and return the raw ABI-encoded result."""
        ...

    def transact(self, to: str, data: bytes) -> List[EventLog]:
        """Submit one atomic state-changing call and return its emitted events in order.

        Must raise if the call reverts or is never mined; a return value means
        every state change and event is final.
        """
        ...


class Signer(Protocol):
    """Supplies the account submitting transactions."""

    def get_address(self) -> str:
        ...


class StaticSigner:
    """Signer with a fixed account address, for read paths and offline use."""

    def __init__(self, address: str):
        self.address = to_checksum_address(address)

    def get_address(self) -> str:
        return self.address
