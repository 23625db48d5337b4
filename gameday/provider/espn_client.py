"""ESPN HTTP client for college-football scoreboards, game packages and teams."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests

from gameday.aggregation.service import new_cache_token
from gameday.provider.espn_parser import (
    parse_calendar,
    parse_play_by_play,
    parse_scoreboard,
    parse_team,
)
from gameday.provider.schema import Game
from gameday.settings import Settings, get_settings

logger = logging.getLogger(__name__)
SITE_API_BASE_PATH = "/apis/site/v2/sports/football/college-football"
PBP_PATH = "/core/college-football/playbyplay"
DEFAULT_BACKOFF_SECONDS = 0.5
DEFAULT_USER_AGENT = "gameday/1.0 (+https://example.local)"
MAX_ERROR_SNIPPET = 300


def build_scoreboard_params(
    params: dict[str, Any] | None, default_group: str
) -> dict[str, str]:
    """Translate a week filter into ESPN scoreboard query parameters."""

    query: dict[str, str] = {}
    if params:
        if params.get("year"):
            query["dates"] = str(params["year"])
        if params.get("week"):
            query["week"] = str(params["week"])
        if params.get("type"):
            query["seasontype"] = str(params["type"])
        group = params.get("group")
        query["groups"] = str(group) if group else default_group
    else:
        query["groups"] = default_group
    query["limit"] = "300"
    return query


def build_pbp_url(cdn_url: str, game_id: str, cache_token: int) -> str:
    # The trailing bare token only defeats intermediate caches.
    return (
        f"{cdn_url}{PBP_PATH}?gameId={game_id}"
        f"&xhr=1&render=false&userab=18&{cache_token}"
    )


class EspnClient:
    """
    Thin ESPN client. Every getter returns None when the data could not be
    fetched; failures are logged, never raised.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.session = session or requests.Session()
        self.session.headers.update(
            {"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json"}
        )

    def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        retries = self.settings.espn_retries
        last_error: str | None = None
        for attempt in range(retries):
            try:
                response = self.session.get(
                    url, params=params, timeout=self.settings.espn_timeout_seconds
                )
            except requests.RequestException as exc:
                last_error = str(exc)
                logger.warning(
                    "ESPN request failed url=%s attempt=%s error=%s",
                    url,
                    attempt + 1,
                    exc,
                )
            else:
                if response.status_code == 200:
                    try:
                        return response.json()
                    except ValueError as exc:
                        last_error = f"invalid JSON: {exc}"
                        logger.error("ESPN returned non-JSON body url=%s", url)
                elif response.status_code == 404:
                    logger.error("ESPN resource not found url=%s", url)
                    return None
                else:
                    last_error = f"status={response.status_code}"
                    logger.error(
                        "ESPN non-200 status=%s url=%s body=%s",
                        response.status_code,
                        url,
                        response.text[:MAX_ERROR_SNIPPET],
                    )
            if attempt < retries - 1:
                time.sleep(DEFAULT_BACKOFF_SECONDS * (2**attempt))

        logger.error("ESPN request gave up url=%s error=%s", url, last_error)
        return None

    def _site_url(self, path: str) -> str:
        return f"{self.settings.espn_site_api_url}{SITE_API_BASE_PATH}{path}"

    def _scoreboard(self, params: dict[str, Any] | None) -> dict[str, Any] | None:
        query = build_scoreboard_params(params, self.settings.espn_default_group)
        payload = self._get_json(self._site_url("/scoreboard"), query)
        if not isinstance(payload, dict):
            return None
        return payload

    def get_game_list(self, params: dict[str, Any] | None = None) -> list[Game] | None:
        payload = self._scoreboard(params)
        if payload is None:
            return None
        return parse_scoreboard(payload)

    def get_weeks_map(self) -> list[dict[str, Any]] | None:
        payload = self._scoreboard(None)
        if payload is None:
            return None
        return parse_calendar(payload)

    def get_game_header(self, game_id: str, cache_token: int) -> dict[str, Any] | None:
        url = build_pbp_url(self.settings.espn_cdn_url, game_id, cache_token)
        payload = self._get_json(url)
        if not isinstance(payload, dict) or "gamepackageJSON" not in payload:
            return None
        return payload

    def get_pbp(self, game_id: str) -> dict[str, Any] | None:
        url = build_pbp_url(self.settings.espn_cdn_url, game_id, new_cache_token())
        payload = self._get_json(url)
        if not isinstance(payload, dict):
            return None
        return parse_play_by_play(payload)

    def get_team_information(self, year: int, team_id: str) -> dict[str, Any] | None:
        team_payload = self._get_json(self._site_url(f"/teams/{team_id}"))
        if not isinstance(team_payload, dict):
            return None
        schedule_payload = self._get_json(
            self._site_url(f"/teams/{team_id}/schedule"), {"season": str(year)}
        )
        if not isinstance(schedule_payload, dict):
            schedule_payload = None
        return parse_team(team_payload, schedule_payload)

    def get_service_health(self) -> dict[str, Any]:
        started = time.monotonic()
        try:
            response = self.session.get(
                self._site_url("/scoreboard"),
                params={"limit": "1"},
                timeout=self.settings.espn_timeout_seconds,
            )
            reachable = response.status_code == 200
        except requests.RequestException as exc:
            logger.warning("ESPN health probe failed error=%s", exc)
            reachable = False
        return {
            "status": "ok" if reachable else "degraded",
            "espn": reachable,
            "latency_ms": round((time.monotonic() - started) * 1000, 1),
        }
