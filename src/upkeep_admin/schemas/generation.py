"""Protocol generation and trigger enums."""

from __future__ import annotations

from enum import Enum, IntEnum


class ProtocolGeneration(str, Enum):
    """Incompatible registry/registrar protocol generations.

    The four legacy 1.x registry point releases share one generation; the
    matching registrar is the 1.2-era KeeperRegistrar.
    """

    GEN1_0 = "1.0"
    GEN2_0 = "2.0"
    GEN2_1 = "2.1"


class TriggerKind(IntEnum):
    """Upkeep trigger type.

    The registrar only knows CONDITION (0) and LOG (1); a cron schedule is
    registered behind a condition trigger, so use ``onchain_tag`` for the
    uint8 sent to the registrar.
    """

    CONDITION = 0
    LOG = 1
    CRON = 2

    @property
    def onchain_tag(self) -> int:
        if self is TriggerKind.CRON:
            return int(TriggerKind.CONDITION)
        return int(self)


class RegistrationPath(str, Enum):
    """Registration entry point, used to pick the request-hash log position."""

    CONDITION = "condition"
    LOG = "log"
    CRON = "cron"


class AutoApproveType(IntEnum):
    DISABLED = 0
    ENABLED_SENDER_ALLOWLIST = 1
    ENABLED_ALL = 2
