from __future__ import annotations

import unittest

from gameday.provider.espn_parser import (
    parse_calendar,
    parse_play_by_play,
    parse_scoreboard,
    parse_team,
)


def _event(event_id: str, date: str, competitors: list[dict], status_name="STATUS_SCHEDULED") -> dict:
    return {
        "id": event_id,
        "date": date,
        "name": "Auburn Tigers at Georgia Bulldogs",
        "season": {"year": 2023, "type": 2},
        "week": {"number": 5},
        "competitions": [
            {
                "id": event_id,
                "venue": {"fullName": "Sanford Stadium"},
                "broadcasts": [{"names": ["CBS"]}],
                "status": {
                    "type": {"id": "1", "name": status_name, "shortDetail": "9/30 - 3:30 PM EDT"}
                },
                "competitors": competitors,
            }
        ],
    }


AWAY_FIRST = [
    {"homeAway": "away", "id": "2", "score": "20", "team": {"id": "2", "abbreviation": "AUB"}},
    {
        "homeAway": "home",
        "id": "61",
        "score": "27",
        "curatedRank": {"current": 1},
        "team": {"id": "61", "abbreviation": "UGA", "displayName": "Georgia Bulldogs"},
    },
]


class ScoreboardParserTests(unittest.TestCase):
    def test_orders_competitors_home_then_away(self) -> None:
        games = parse_scoreboard({"events": [_event("401520300", "2023-09-30T19:30Z", AWAY_FIRST)]})

        self.assertEqual(1, len(games))
        game = games[0]
        self.assertEqual("UGA", game.home.team.abbreviation)
        self.assertEqual("AUB", game.away.team.abbreviation)
        self.assertEqual(1, game.home.rank)
        self.assertEqual(27, game.home.score)
        self.assertEqual("1", game.status_type_id)
        self.assertEqual("STATUS_SCHEDULED", game.status_type_name)
        self.assertEqual(2023, game.season)
        self.assertEqual(5, game.week)
        self.assertEqual("Sanford Stadium", game.venue)
        self.assertEqual("CBS", game.broadcast)

    def test_skips_events_without_start_time_or_two_competitors(self) -> None:
        payload = {
            "events": [
                _event("bad-date", "not-a-date", AWAY_FIRST),
                _event("one-team", "2023-09-30T19:30Z", AWAY_FIRST[:1]),
                _event("ok", "2023-09-30T19:30Z", AWAY_FIRST),
                _event("ok", "2023-09-30T19:30Z", AWAY_FIRST),
            ]
        }

        self.assertEqual(["ok"], [game.id for game in parse_scoreboard(payload)])

    def test_unranked_teams_have_no_rank(self) -> None:
        competitors = [dict(c) for c in AWAY_FIRST]
        competitors[0]["curatedRank"] = {"current": 99}

        game = parse_scoreboard({"events": [_event("1", "2023-09-30T19:30Z", competitors)]})[0]

        self.assertIsNone(game.away.rank)

    def test_mixed_date_formats_are_all_timezone_aware(self) -> None:
        payload = {
            "events": [
                _event("with-offset", "2023-09-30T16:00:00Z", AWAY_FIRST),
                _event("without-offset", "2023-09-30T12:00:00", AWAY_FIRST),
            ]
        }

        games = parse_scoreboard(payload)

        self.assertEqual(["with-offset", "without-offset"], [game.id for game in games])
        self.assertTrue(all(game.date.tzinfo is not None for game in games))
        self.assertLess(games[1].date, games[0].date)

    def test_missing_events_gives_empty_list(self) -> None:
        self.assertEqual([], parse_scoreboard({}))


class CalendarParserTests(unittest.TestCase):
    def test_parses_season_types_and_weeks(self) -> None:
        payload = {
            "leagues": [
                {
                    "calendar": [
                        {
                            "label": "Regular Season",
                            "value": "2",
                            "entries": [
                                {"label": "Week 1", "value": "1", "detail": "Aug 26-Sep 4"},
                                {"label": "Week 2", "value": "2", "detail": "Sep 5-10"},
                            ],
                        },
                        "2023-12-16T08:00Z",
                    ]
                }
            ]
        }

        calendar = parse_calendar(payload)

        self.assertEqual(1, len(calendar))
        self.assertEqual(2, calendar[0]["type"])
        self.assertEqual([1, 2], [week["week"] for week in calendar[0]["weeks"]])
        self.assertEqual("Aug 26-Sep 4", calendar[0]["weeks"][0]["detail"])


class PlayByPlayParserTests(unittest.TestCase):
    def test_flattens_drive_plays_and_keeps_header(self) -> None:
        payload = {
            "gamepackageJSON": {
                "header": {
                    "season": {"year": 2023},
                    "competitions": [{"id": "401520300"}],
                },
                "drives": {
                    "previous": [
                        {"id": "d1", "plays": [{"id": "p1"}, {"id": "p2"}]},
                        {"id": "d2", "plays": [{"id": "p3"}]},
                    ],
                    "current": {"id": "d3", "plays": [{"id": "p4"}]},
                },
                "boxscore": {"teams": []},
            }
        }

        pbp = parse_play_by_play(payload)

        self.assertEqual({"id": "401520300"}, pbp["gameInfo"])
        self.assertEqual(2023, pbp["season"])
        self.assertEqual(["p1", "p2", "p3", "p4"], [play["id"] for play in pbp["plays"]])
        self.assertEqual(2, len(pbp["drives"]))
        self.assertEqual({"teams": []}, pbp["boxScore"])

    def test_game_info_is_none_without_header(self) -> None:
        self.assertIsNone(parse_play_by_play({"gamepackageJSON": {}})["gameInfo"])


class TeamParserTests(unittest.TestCase):
    def test_team_without_body_is_none(self) -> None:
        self.assertIsNone(parse_team({"team": {}}, None))

    def test_team_with_schedule(self) -> None:
        parsed = parse_team({"team": {"id": "61"}}, {"events": [{"id": "1"}, "junk"]})

        self.assertEqual({"team": {"id": "61"}, "schedule": [{"id": "1"}]}, parsed)


if __name__ == "__main__":
    unittest.main()
