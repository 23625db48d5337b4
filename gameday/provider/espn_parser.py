"""Parsers for ESPN college-football payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from gameday.provider.schema import Competitor, Game, TeamRef


def _safe_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_start_time(value: Any) -> datetime | None:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            pass
    return None


def _first_dict(items: Any) -> dict[str, Any]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def _team_ref(team: Any) -> TeamRef:
    if not isinstance(team, dict):
        return TeamRef()
    return TeamRef(
        id=str(team["id"]) if team.get("id") is not None else None,
        abbreviation=team.get("abbreviation"),
        display_name=team.get("displayName"),
        short_display_name=team.get("shortDisplayName"),
        location=team.get("location"),
        name=team.get("name"),
        logo=team.get("logo"),
    )


def _competitor(raw: dict[str, Any], home_away: str) -> Competitor:
    rank = _safe_int((raw.get("curatedRank") or {}).get("current"))
    # ESPN reports unranked teams as 99.
    if rank is not None and rank >= 99:
        rank = None
    return Competitor(
        id=str(raw.get("id", "")),
        home_away=home_away,
        team=_team_ref(raw.get("team")),
        score=_safe_int(raw.get("score")),
        rank=rank,
    )


def split_home_away(
    competitors: list[Any],
) -> tuple[dict[str, Any], dict[str, Any]] | None:
    home = None
    away = None
    for competitor in competitors:
        if not isinstance(competitor, dict):
            continue
        home_away = competitor.get("homeAway")
        if home_away == "home":
            home = competitor
        elif home_away == "away":
            away = competitor
    if home is None or away is None:
        positional = [c for c in competitors if isinstance(c, dict)]
        if len(positional) < 2:
            return None
        home, away = positional[0], positional[1]
    return home, away


def _broadcast_names(competition: dict[str, Any]) -> str | None:
    names: list[str] = []
    for broadcast in competition.get("broadcasts") or []:
        if isinstance(broadcast, dict):
            names.extend(str(name) for name in broadcast.get("names") or [])
    return ", ".join(names) or None


def parse_event(event: dict[str, Any]) -> Game | None:
    """Parse one scoreboard event; returns None when it cannot be displayed."""

    competition = _first_dict(event.get("competitions"))
    start_time = _parse_start_time(event.get("date") or competition.get("date"))
    if start_time is None:
        return None

    pair = split_home_away(competition.get("competitors") or [])
    if pair is None:
        return None
    home, away = pair

    status = competition.get("status") or event.get("status") or {}
    status_type = status.get("type") or {}
    season = event.get("season") or {}
    week = event.get("week") or {}

    return Game(
        id=str(event.get("id") or competition.get("id")),
        date=start_time,
        name=event.get("name"),
        short_name=event.get("shortName"),
        season=_safe_int(season.get("year")),
        week=_safe_int(week.get("number")),
        status_type_name=str(status_type.get("name") or ""),
        status_type_id=str(status_type.get("id") or ""),
        status_detail=status_type.get("shortDetail") or status_type.get("detail"),
        competitors=[_competitor(home, "home"), _competitor(away, "away")],
        venue=(competition.get("venue") or {}).get("fullName"),
        broadcast=_broadcast_names(competition),
    )


def parse_scoreboard(scoreboard_json: dict[str, Any]) -> list[Game]:
    """Parse ESPN scoreboard JSON into Game records, in provider order."""

    events = scoreboard_json.get("events")
    if not isinstance(events, list):
        return []

    seen_ids: set[str] = set()
    games: list[Game] = []
    for event in events:
        if not isinstance(event, dict):
            continue
        game = parse_event(event)
        if game is None or game.id in seen_ids:
            continue
        seen_ids.add(game.id)
        games.append(game)
    return games


def parse_calendar(scoreboard_json: dict[str, Any]) -> list[dict[str, Any]]:
    """Season calendar as season types, each with its list of weeks."""

    league = _first_dict(scoreboard_json.get("leagues"))
    calendar = league.get("calendar")
    if not isinstance(calendar, list):
        return []

    season_types: list[dict[str, Any]] = []
    for section in calendar:
        # Some seasons report a flat list of dates instead of sections.
        if not isinstance(section, dict):
            continue
        weeks = []
        for entry in section.get("entries") or []:
            if not isinstance(entry, dict):
                continue
            weeks.append(
                {
                    "week": _safe_int(entry.get("value")),
                    "label": entry.get("label"),
                    "detail": entry.get("detail"),
                    "start_date": entry.get("startDate"),
                    "end_date": entry.get("endDate"),
                }
            )
        season_types.append(
            {
                "type": _safe_int(section.get("value")),
                "label": section.get("label"),
                "weeks": weeks,
            }
        )
    return season_types


def _drive_plays(drives: dict[str, Any]) -> list[dict[str, Any]]:
    plays: list[dict[str, Any]] = []
    for drive in drives.get("previous") or []:
        if isinstance(drive, dict):
            plays.extend(p for p in drive.get("plays") or [] if isinstance(p, dict))
    current = drives.get("current")
    if isinstance(current, dict):
        current_id = current.get("id")
        already_listed = any(
            isinstance(d, dict) and d.get("id") == current_id
            for d in drives.get("previous") or []
        )
        if not already_listed:
            plays.extend(p for p in current.get("plays") or [] if isinstance(p, dict))
    return plays


def parse_play_by_play(payload: dict[str, Any]) -> dict[str, Any]:
    """
    Shape a CDN game package into the play-by-play record.

    ``gameInfo`` is None when the payload carries no competition header.
    """

    package = payload.get("gamepackageJSON") or {}
    header = package.get("header") or {}
    game_info = _first_dict(header.get("competitions")) or None

    drives = package.get("drives") or {}
    drive_list = [d for d in drives.get("previous") or [] if isinstance(d, dict)]
    plays = package.get("plays")
    if not isinstance(plays, list):
        plays = _drive_plays(drives)

    return {
        "gameInfo": game_info,
        "season": _safe_int((header.get("season") or {}).get("year")),
        "drives": drive_list,
        "plays": plays,
        "scoringPlays": package.get("scoringPlays") or [],
        "boxScore": package.get("boxscore") or {},
        "winProbability": package.get("winprobability") or [],
        "leaders": package.get("leaders") or [],
    }


def parse_team(
    team_json: dict[str, Any], schedule_json: dict[str, Any] | None
) -> dict[str, Any] | None:
    team = team_json.get("team")
    if not isinstance(team, dict) or not team:
        return None
    events = (schedule_json or {}).get("events")
    schedule = []
    if isinstance(events, list):
        schedule = [event for event in events if isinstance(event, dict)]
    return {"team": team, "schedule": schedule}
