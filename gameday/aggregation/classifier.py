from __future__ import annotations

from enum import Enum

SCHEDULED_STATUS = "STATUS_SCHEDULED"


class GameState(str, Enum):
    SCHEDULED = "scheduled"
    LIVE_OR_FINAL = "live_or_final"


def classify_status(status_type_name: str | None) -> GameState:
    if status_type_name == SCHEDULED_STATUS:
        return GameState.SCHEDULED
    return GameState.LIVE_OR_FINAL
