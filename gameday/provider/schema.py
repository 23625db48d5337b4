"""Provider-agnostic game records shared by the client, aggregator and views."""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, field_validator


class TeamRef(BaseModel):
    id: Optional[str] = None
    abbreviation: Optional[str] = None
    display_name: Optional[str] = None
    short_display_name: Optional[str] = None
    location: Optional[str] = None
    name: Optional[str] = None
    logo: Optional[str] = None


class Competitor(BaseModel):
    # Placeholder/bye entries carry negative or non-numeric ids.
    id: str
    home_away: Literal["home", "away"]
    team: TeamRef
    score: Optional[int] = None
    rank: Optional[int] = None


class Game(BaseModel):
    """
    A single game as listed on a week scoreboard.

    ``competitors`` is always ordered (home, away).
    """

    id: str
    date: datetime
    name: Optional[str] = None
    short_name: Optional[str] = None
    season: Optional[int] = None
    week: Optional[int] = None
    status_type_name: str
    status_type_id: str
    status_detail: Optional[str] = None
    competitors: list[Competitor]
    venue: Optional[str] = None
    broadcast: Optional[str] = None

    @field_validator("date")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        # Offset-less kickoff times are UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def home(self) -> Competitor:
        return self.competitors[0]

    @property
    def away(self) -> Competitor:
        return self.competitors[1]


class WeekFilter(BaseModel):
    year: int
    week: int
    type: int = 2
    group: Optional[str] = None

    def as_params(self) -> dict[str, str]:
        params = {
            "year": str(self.year),
            "week": str(self.week),
            "type": str(self.type),
        }
        if self.group:
            params["group"] = self.group
        return params
