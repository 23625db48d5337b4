"""Answers the week listing and game detail requests for the web layer."""

from __future__ import annotations

import logging
import time
from typing import Any

from gameday.aggregation.classifier import GameState, classify_status
from gameday.aggregation.normalizer import normalize_game_list
from gameday.aggregation.season_stats import SeasonStatsResolver
from gameday.errors import DataUnavailable
from gameday.provider.espn_parser import split_home_away
from gameday.provider.schema import Game, WeekFilter
from gameday.schemas import (
    LiveDetail,
    Matchup,
    ScheduledDetail,
    TeamDetail,
)

logger = logging.getLogger(__name__)


def new_cache_token() -> int:
    """Microsecond timestamp, unique per request."""
    return int(time.time() * 1_000_000)


def _describe_filter(week_filter: WeekFilter | None) -> str:
    if week_filter is None:
        return "current week"
    return (
        f"year={week_filter.year} type={week_filter.type} week={week_filter.week}"
    )


class GameAggregator:
    """
    Composes the provider client with the normalizer, classifier and season
    stats resolver. Nothing it returns carries raw provider objects except
    the opaque ``game_info`` blocks the detail views render.
    """

    def __init__(self, provider, stats_resolver: SeasonStatsResolver) -> None:
        self.provider = provider
        self.stats_resolver = stats_resolver

    def get_week_games(
        self, week_filter: WeekFilter | None = None, source: str | None = None
    ) -> list[Game]:
        params = week_filter.as_params() if week_filter else None
        games = self.provider.get_game_list(params)
        if games is None:
            descriptor = source or _describe_filter(week_filter)
            raise DataUnavailable(
                f"Data not available for {descriptor} because of a service error.",
                resource=descriptor,
            )
        normalized = normalize_game_list(games)
        logger.debug(
            "Week games %s: fetched=%s displayed=%s",
            _describe_filter(week_filter),
            len(games),
            len(normalized),
        )
        return normalized

    def get_weeks_map(self) -> list[dict[str, Any]]:
        weeks = self.provider.get_weeks_map()
        if weeks is None:
            raise DataUnavailable(
                "Data not available for the season calendar because of a service error.",
                resource="calendar",
            )
        return weeks

    def get_game_detail(
        self, game_id: str, cache_token: int | None = None
    ) -> ScheduledDetail | LiveDetail:
        token = cache_token if cache_token is not None else new_cache_token()
        payload = self.provider.get_game_header(game_id, token)
        if payload is None:
            raise DataUnavailable(
                f"Data not available for game {game_id}. An internal service may be down.",
                resource=f"game/{game_id}",
            )

        header = payload["gamepackageJSON"]["header"]
        competition = header["competitions"][0]
        season = int(header["season"]["year"])
        state = classify_status(competition["status"]["type"]["name"])

        if state is GameState.SCHEDULED:
            return self._pregame_detail(competition, season)
        return self.get_play_by_play(game_id)

    def _pregame_detail(
        self, competition: dict[str, Any], season: int
    ) -> ScheduledDetail:
        pair = split_home_away(competition["competitors"])
        if pair is None:
            raise DataUnavailable(
                f"Data not available for game {competition.get('id')}: "
                "competitors have not been announced.",
                resource=f"game/{competition.get('id')}",
            )
        home, away = pair
        away_stats = self.stats_resolver.resolve(season, away["team"]["abbreviation"])
        home_stats = self.stats_resolver.resolve(season, home["team"]["abbreviation"])
        return ScheduledDetail(
            game_info=competition,
            season=season,
            matchup=Matchup(team=[*away_stats.as_rows(), *home_stats.as_rows()]),
        )

    def get_play_by_play(self, game_id: str) -> LiveDetail:
        data = self.provider.get_pbp(game_id)
        if data is None or data.get("gameInfo") is None:
            raise DataUnavailable(
                f"Data not available for game {game_id}. An internal service may be down.",
                resource=f"game/{game_id}",
            )
        return LiveDetail(
            game_info=data["gameInfo"],
            season=data.get("season"),
            drives=data.get("drives") or [],
            plays=data.get("plays") or [],
            scoring_plays=data.get("scoringPlays") or [],
            box_score=data.get("boxScore") or {},
            win_probability=data.get("winProbability") or [],
            leaders=data.get("leaders") or [],
        )

    def get_team_detail(self, year: int, team_id: str) -> TeamDetail:
        data = self.provider.get_team_information(year, team_id)
        if data is None:
            raise DataUnavailable(
                f"Data not available for team {team_id} and season {year}. "
                "An internal service may be down.",
                resource=f"team/{team_id}",
            )
        return TeamDetail(season=year, team=data["team"], schedule=data.get("schedule") or [])

    def get_service_health(self) -> dict[str, Any]:
        return self.provider.get_service_health()
