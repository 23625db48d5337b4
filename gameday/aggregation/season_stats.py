"""Team season statistics with fallback to earlier seasons."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel

from gameday.errors import SeasonStatsNotFound

logger = logging.getLogger(__name__)

# Earliest season with published team stats.
FLOOR_YEAR = 2014
STATS_FILENAME = "overall.csv"


class SeasonStats(BaseModel):
    team: str
    season: Optional[int] = None
    records: list[dict[str, Any]] = []

    @property
    def is_placeholder(self) -> bool:
        return self.season is None

    def as_rows(self) -> list[dict[str, Any]]:
        if self.is_placeholder:
            return [{"team": self.team}]
        return list(self.records)


class CsvSeasonStatsSource:
    """Reads ``<root>/<year>/<abbreviation>/overall.csv`` as row dicts."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, year: int, abbreviation: str) -> Path:
        return self.root / str(year) / abbreviation / STATS_FILENAME

    def load(self, year: int, abbreviation: str) -> list[dict[str, Any]]:
        path = self.path_for(year, abbreviation)
        try:
            with path.open(newline="", encoding="utf-8") as handle:
                records = list(csv.DictReader(handle))
        except (OSError, csv.Error, UnicodeDecodeError) as exc:
            logger.debug("Season stats read failed path=%s error=%s", path, exc)
            raise SeasonStatsNotFound(year, abbreviation) from exc
        if not records:
            raise SeasonStatsNotFound(year, abbreviation)
        return records


class SeasonStatsResolver:
    def __init__(self, source, floor_year: int = FLOOR_YEAR) -> None:
        self.source = source
        self.floor_year = floor_year

    def resolve(self, year: int, abbreviation: str) -> SeasonStats:
        """
        Return stats for the latest season at or before ``year`` that has
        any, never going below the floor year. Falls back to a placeholder
        holding only the team abbreviation instead of raising.
        """

        current = year
        while True:
            try:
                records = self.source.load(current, abbreviation)
            except SeasonStatsNotFound:
                if current - 1 < self.floor_year:
                    logger.info(
                        "No season stats for %s between %s and %s, using placeholder",
                        abbreviation,
                        year,
                        current,
                    )
                    return SeasonStats(team=abbreviation)
                logger.info(
                    "Could not find season stats for %s in %s, checking %s",
                    abbreviation,
                    current,
                    current - 1,
                )
                current -= 1
                continue
            return SeasonStats(team=abbreviation, season=current, records=records)
