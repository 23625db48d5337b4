"""
Environment configuration.

Season stats are read from ``SEASON_STATS_DIR`` laid out as
``<year>/<TEAM>/overall.csv``. The default is a ``data/`` directory next to the
package, which is not shipped; without it every pregame matchup falls back to
placeholder rows holding only the team abbreviation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_SEASON_STATS_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class Settings:
    espn_site_api_url: str
    espn_cdn_url: str
    season_stats_dir: Path
    espn_timeout_seconds: float
    espn_retries: int
    espn_default_group: str
    log_level: str


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def load_settings() -> Settings:
    return Settings(
        espn_site_api_url=os.getenv(
            "ESPN_SITE_API_URL", "https://site.api.espn.com"
        ).rstrip("/"),
        espn_cdn_url=os.getenv("ESPN_CDN_URL", "http://cdn.espn.com").rstrip("/"),
        season_stats_dir=Path(
            os.getenv("SEASON_STATS_DIR") or DEFAULT_SEASON_STATS_DIR
        ),
        espn_timeout_seconds=_env_float("ESPN_TIMEOUT_SECONDS", 12.0),
        espn_retries=max(1, _env_int("ESPN_RETRIES", 3)),
        espn_default_group=(os.getenv("ESPN_DEFAULT_GROUP") or "80").strip(),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip().upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
