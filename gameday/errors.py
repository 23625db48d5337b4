"""Errors raised by the aggregation layer."""

from __future__ import annotations


class DataUnavailable(RuntimeError):
    """The data provider returned nothing where data was required."""

    def __init__(self, message: str, resource: str | None = None) -> None:
        super().__init__(message)
        self.resource = resource


class SeasonStatsNotFound(LookupError):
    """No season statistics exist for a (year, abbreviation) pair."""

    def __init__(self, year: int, abbreviation: str) -> None:
        super().__init__(f"no season stats for {abbreviation} in {year}")
        self.year = year
        self.abbreviation = abbreviation
