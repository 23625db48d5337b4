from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from gameday.provider.schema import Game


class Matchup(BaseModel):
    # Away team rows first, then home team rows.
    team: list[dict[str, Any]]


class ScheduledDetail(BaseModel):
    kind: Literal["scheduled"] = "scheduled"
    game_info: dict[str, Any]
    season: int
    matchup: Matchup


class LiveDetail(BaseModel):
    kind: Literal["live_or_final"] = "live_or_final"
    game_info: dict[str, Any]
    season: Optional[int] = None
    drives: list[dict[str, Any]] = []
    plays: list[dict[str, Any]] = []
    scoring_plays: list[dict[str, Any]] = []
    box_score: dict[str, Any] = {}
    win_probability: list[dict[str, Any]] = []
    leaders: list[dict[str, Any]] = []


class ErrorDetail(BaseModel):
    kind: Literal["error"] = "error"
    message: str
    resource: Optional[str] = None


GameDetail = Annotated[
    Union[ScheduledDetail, LiveDetail, ErrorDetail],
    Field(discriminator="kind"),
]
game_detail_adapter: TypeAdapter = TypeAdapter(GameDetail)


class WeekGamesResponse(BaseModel):
    games: list[Game]
    count: int
    year: Optional[int] = None
    week: Optional[int] = None
    season_type: Optional[int] = None
    group: Optional[str] = None


class TeamDetail(BaseModel):
    season: int
    team: dict[str, Any]
    schedule: list[dict[str, Any]] = []
