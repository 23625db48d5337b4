"""Quick probe: print a week's games in scoreboard display order."""

from __future__ import annotations

import argparse
import logging

from gameday.aggregation.season_stats import CsvSeasonStatsSource, SeasonStatsResolver
from gameday.aggregation.service import GameAggregator
from gameday.errors import DataUnavailable
from gameday.provider.espn_client import EspnClient
from gameday.provider.schema import Game, WeekFilter
from gameday.settings import get_settings


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch a college-football week from ESPN and print it in display order.",
    )
    parser.add_argument("--year", type=int, help="Season year (default: current week).")
    parser.add_argument("--week", type=int, help="Week number (requires --year).")
    parser.add_argument(
        "--type",
        type=int,
        default=2,
        help="Season type: 1 preseason, 2 regular, 3 postseason (default: 2).",
    )
    parser.add_argument("--group", type=str, help="ESPN group id (80 FBS, 81 FCS).")
    args = parser.parse_args(argv)
    if (args.year is None) != (args.week is None):
        parser.error("--year and --week must be given together")
    return args


def _format_game(game: Game) -> str:
    away = game.away.team.abbreviation or game.away.team.display_name or "TBD"
    home = game.home.team.abbreviation or game.home.team.display_name or "TBD"
    score = ""
    if game.away.score is not None and game.home.score is not None:
        score = f" {game.away.score}-{game.home.score}"
    status = game.status_detail or game.status_type_name
    return f"{game.id:>10}  {game.date:%Y-%m-%d %H:%M}  {away} @ {home}{score}  [{status}]"


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args(argv)
    settings = get_settings()
    aggregator = GameAggregator(
        EspnClient(settings),
        SeasonStatsResolver(CsvSeasonStatsSource(settings.season_stats_dir)),
    )

    week_filter = None
    if args.year is not None:
        week_filter = WeekFilter(
            year=args.year, week=args.week, type=args.type, group=args.group
        )

    try:
        games = aggregator.get_week_games(week_filter)
    except DataUnavailable as exc:
        logging.error("ESPN error: %s", exc)
        raise SystemExit(1)

    for game in games:
        print(_format_game(game))
    logging.info("Listed %s games", len(games))


if __name__ == "__main__":
    main()
