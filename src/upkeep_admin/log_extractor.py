"""Request-hash recovery from the events of a funded registration call.

``transferAndCall`` on the funding token emits, in order:

0. the ERC-20 ``Transfer`` notification,
1. the ERC-677 ``Transfer(address,address,uint256,bytes)`` bookkeeping event,
2. the registrar's ``RegistrationRequested`` event.

The request hash is read from a fixed (event, topic) slot per generation and
registration path. Extraction is purely positional: if the emitter reorders
its events the wrong bytes come back, and this module does not try to
correct for that.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from .abi import event_topic
from .exceptions import LogExtractionError
from .schemas import EventLog, ProtocolGeneration, RegistrationPath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogPosition:
    event_index: int
    topic_index: int


# RegistrationRequested.hash is the first indexed argument.
REQUEST_HASH_POSITION = LogPosition(event_index=2, topic_index=1)
# Log-trigger registrations have always been read from the signature slot;
# kept as-is until checked against a live 2.1 registrar.
LOG_TRIGGER_HASH_POSITION = LogPosition(event_index=2, topic_index=0)

HASH_POSITIONS: Dict[Tuple[ProtocolGeneration, RegistrationPath], LogPosition] = {
    (ProtocolGeneration.GEN1_0, RegistrationPath.CONDITION): REQUEST_HASH_POSITION,
    (ProtocolGeneration.GEN2_0, RegistrationPath.CONDITION): REQUEST_HASH_POSITION,
    (ProtocolGeneration.GEN2_1, RegistrationPath.CONDITION): REQUEST_HASH_POSITION,
    (ProtocolGeneration.GEN2_1, RegistrationPath.CRON): REQUEST_HASH_POSITION,
    (ProtocolGeneration.GEN2_1, RegistrationPath.LOG): LOG_TRIGGER_HASH_POSITION,
}


def extract(
    events: Sequence[EventLog],
    generation: ProtocolGeneration,
    path: RegistrationPath,
) -> bytes:
    """Return the request hash at the table position for (generation, path)."""
    position = HASH_POSITIONS.get((generation, path))
    if position is None:
        raise LogExtractionError(
            f"No request hash position for generation {generation.value} and {path.value} registration"
        )
    if len(events) <= position.event_index:
        raise LogExtractionError(
            f"Expected at least {position.event_index + 1} events, got {len(events)}"
        )
    topics = events[position.event_index].topics
    if len(topics) <= position.topic_index:
        raise LogExtractionError(
            f"Event {position.event_index} has {len(topics)} topics, "
            f"need topic {position.topic_index}"
        )
    request_hash = topics[position.topic_index]
    logger.debug(
        "Extracted request hash 0x%s from event %d topic %d",
        request_hash.hex(),
        position.event_index,
        position.topic_index,
    )
    return request_hash


def find_by_signature(events: Sequence[EventLog], signature: str) -> Optional[EventLog]:
    """Return the first event whose topic 0 matches ``signature``, if any."""
    topic = event_topic(signature)
    for event in events:
        if event.topics and event.topics[0] == topic:
            return event
    return None


__all__ = [
    "LogPosition",
    "REQUEST_HASH_POSITION",
    "LOG_TRIGGER_HASH_POSITION",
    "HASH_POSITIONS",
    "extract",
    "find_by_signature",
]
