"""Filtering and display ordering for week game lists."""

from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Iterable

from gameday.provider.schema import Game

IN_PROGRESS_MARKER = "IN_PROGRESS"


def _is_non_negative_number(value: str) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return not math.isnan(number) and number >= 0


def is_displayable(game: Game) -> bool:
    """False for placeholder entries whose competitor ids are negative or non-numeric."""
    if len(game.competitors) < 2:
        return False
    return _is_non_negative_number(game.home.id) and _is_non_negative_number(
        game.away.id
    )


def _status_rank(game: Game) -> int | None:
    try:
        return int(game.status_type_id)
    except (TypeError, ValueError):
        return None


def compare_games(a: Game, b: Game) -> int:
    a_live = IN_PROGRESS_MARKER in a.status_type_name
    b_live = IN_PROGRESS_MARKER in b.status_type_name
    if a_live and not b_live:
        return -1
    if b_live and not a_live:
        return 1

    if a.date < b.date:
        return -1
    if a.date > b.date:
        return 1

    # Same kickoff: the more advanced status goes first.
    a_rank = _status_rank(a)
    b_rank = _status_rank(b)
    if a_rank is None or b_rank is None:
        return 0
    if a_rank > b_rank:
        return -1
    if a_rank < b_rank:
        return 1
    return 0


def normalize_game_list(games: Iterable[Game]) -> list[Game]:
    return sorted(
        (game for game in games if is_displayable(game)),
        key=cmp_to_key(compare_games),
    )
