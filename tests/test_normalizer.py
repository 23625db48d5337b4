from __future__ import annotations

import unittest
from datetime import datetime, timezone

from gameday.aggregation.normalizer import (
    compare_games,
    is_displayable,
    normalize_game_list,
)
from gameday.provider.schema import Competitor, Game, TeamRef


def _game(
    game_id: str,
    date: datetime,
    status_name: str = "STATUS_SCHEDULED",
    status_id: str = "1",
    home_id: str = "2",
    away_id: str = "3",
) -> Game:
    return Game(
        id=game_id,
        date=date,
        status_type_name=status_name,
        status_type_id=status_id,
        competitors=[
            Competitor(id=home_id, home_away="home", team=TeamRef(abbreviation="HOME")),
            Competitor(id=away_id, home_away="away", team=TeamRef(abbreviation="AWAY")),
        ],
    )


NOON = datetime(2023, 9, 30, 16, 0, tzinfo=timezone.utc)
EVENING = datetime(2023, 9, 30, 23, 30, tzinfo=timezone.utc)
NEXT_DAY = datetime(2023, 10, 1, 0, 0, tzinfo=timezone.utc)


class DisplayFilterTests(unittest.TestCase):
    def test_drops_games_with_negative_or_non_numeric_competitor_ids(self) -> None:
        games = [
            _game("ok", NOON),
            _game("negative-home", NOON, home_id="-1"),
            _game("negative-away", NOON, away_id="-2"),
            _game("tbd", NOON, away_id="TBD"),
            _game("empty", NOON, home_id=""),
            _game("nan", NOON, home_id="nan"),
        ]

        normalized = normalize_game_list(games)

        self.assertEqual(["ok"], [game.id for game in normalized])

    def test_zero_and_decimal_ids_are_displayable(self) -> None:
        self.assertTrue(is_displayable(_game("zero", NOON, home_id="0", away_id="12.0")))


class OrderingTests(unittest.TestCase):
    def test_in_progress_games_come_first_regardless_of_date(self) -> None:
        early = _game("early", NOON)
        live_late = _game("live", NEXT_DAY, status_name="STATUS_IN_PROGRESS", status_id="2")

        normalized = normalize_game_list([early, live_late])

        self.assertEqual(["live", "early"], [game.id for game in normalized])
        self.assertEqual(-1, compare_games(live_late, early))
        self.assertEqual(1, compare_games(early, live_late))

    def test_halftime_is_not_treated_as_in_progress(self) -> None:
        halftime = _game("half", NEXT_DAY, status_name="STATUS_HALFTIME", status_id="23")
        scheduled = _game("sched", NOON)

        normalized = normalize_game_list([halftime, scheduled])

        self.assertEqual(["sched", "half"], [game.id for game in normalized])

    def test_distinct_dates_sort_chronologically(self) -> None:
        games = [
            _game("c", NEXT_DAY),
            _game("a", NOON, status_name="STATUS_FINAL", status_id="3"),
            _game("b", EVENING),
        ]

        normalized = normalize_game_list(games)

        self.assertEqual(["a", "b", "c"], [game.id for game in normalized])

    def test_same_kickoff_puts_higher_status_id_first(self) -> None:
        scheduled = _game("scheduled", NOON, status_id="1")
        final = _game("final", NOON, status_name="STATUS_FINAL", status_id="3")
        delayed = _game("delayed", NOON, status_name="STATUS_DELAYED", status_id="7")

        normalized = normalize_game_list([scheduled, final, delayed])

        self.assertEqual(["delayed", "final", "scheduled"], [game.id for game in normalized])

    def test_two_live_games_fall_back_to_date_order(self) -> None:
        later = _game("later", EVENING, status_name="STATUS_IN_PROGRESS", status_id="2")
        earlier = _game("earlier", NOON, status_name="STATUS_IN_PROGRESS", status_id="2")

        normalized = normalize_game_list([later, earlier])

        self.assertEqual(["earlier", "later"], [game.id for game in normalized])

    def test_offset_less_dates_sort_alongside_utc_dates(self) -> None:
        utc_kickoff = _game("utc", datetime(2023, 9, 30, 16, 0, tzinfo=timezone.utc))
        naive_kickoff = _game("naive", datetime(2023, 9, 30, 12, 0))

        normalized = normalize_game_list([utc_kickoff, naive_kickoff])

        self.assertEqual(["naive", "utc"], [game.id for game in normalized])
        self.assertEqual(timezone.utc, normalized[0].date.tzinfo)

    def test_full_ties_keep_input_order(self) -> None:
        first = _game("first", NOON)
        second = _game("second", NOON)

        self.assertEqual(0, compare_games(first, second))
        self.assertEqual(
            ["second", "first"],
            [game.id for game in normalize_game_list([second, first])],
        )

    def test_non_numeric_status_ids_tie(self) -> None:
        self.assertEqual(
            0, compare_games(_game("a", NOON, status_id=""), _game("b", NOON, status_id="3"))
        )


if __name__ == "__main__":
    unittest.main()
