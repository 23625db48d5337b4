from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from gameday.aggregation.season_stats import CsvSeasonStatsSource, SeasonStatsResolver
from gameday.aggregation.service import GameAggregator, new_cache_token
from gameday.errors import DataUnavailable
from gameday.log_buffer import configure_logging, get_log_handler
from gameday.provider.espn_client import EspnClient
from gameday.provider.schema import WeekFilter
from gameday.schemas import ErrorDetail, ScheduledDetail, WeekGamesResponse
from gameday.settings import get_settings

BASE_DIR = Path(__file__).resolve().parent
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    configure_logging(get_settings().log_level)
    logger.info("CFB Gameday starting up")
    yield
    logger.info("CFB Gameday shutting down")


app = FastAPI(title="CFB Gameday", lifespan=lifespan)
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")
templates = Jinja2Templates(directory=BASE_DIR / "templates")

SEASON_TYPE_LABELS = {1: "Preseason", 2: "Regular Season", 3: "Postseason", 4: "Off Season"}
templates.env.globals["season_type_labels"] = SEASON_TYPE_LABELS


@lru_cache(maxsize=1)
def get_aggregator() -> GameAggregator:
    settings = get_settings()
    return GameAggregator(
        EspnClient(settings),
        SeasonStatsResolver(CsvSeasonStatsSource(settings.season_stats_dir)),
    )


def _wants_json(request: Request) -> bool:
    if request.method == "POST":
        return True
    return _is_truthy(request.query_params.get("json"))


def _is_truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true"}


@app.exception_handler(DataUnavailable)
async def data_unavailable_handler(request: Request, exc: DataUnavailable):
    logger.error("Data unavailable path=%s error=%s", request.url.path, exc)
    detail = ErrorDetail(message=str(exc), resource=exc.resource)
    if _wants_json(request):
        return JSONResponse(status_code=503, content=detail.model_dump())
    return templates.TemplateResponse(
        request,
        "error.html",
        {"error": detail},
        status_code=503,
    )


@app.get("/")
def home() -> RedirectResponse:
    return RedirectResponse(url="/cfb")


@app.get("/cfb/healthcheck")
def healthcheck(aggregator: GameAggregator = Depends(get_aggregator)):
    return aggregator.get_service_health()


def _render_scoreboard(
    request: Request,
    aggregator: GameAggregator,
    week_filter: WeekFilter | None,
):
    games = aggregator.get_week_games(week_filter, source=request.url.path)
    week_list = aggregator.get_weeks_map()
    year = week_filter.year if week_filter else None
    week = week_filter.week if week_filter else None
    if week_filter is None and games:
        year, week = games[0].season, games[0].week
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "scoreboard": games,
            "week_list": week_list,
            "year": year,
            "week": week,
            "season_type": week_filter.type if week_filter else 2,
            "group": week_filter.group if week_filter else None,
        },
    )


@app.get("/cfb", response_class=HTMLResponse)
def current_week_page(
    request: Request, aggregator: GameAggregator = Depends(get_aggregator)
):
    return _render_scoreboard(request, aggregator, None)


@app.get("/cfb/year/{year}/type/{season_type}/week/{week}", response_class=HTMLResponse)
def week_page(
    request: Request,
    year: int,
    season_type: int,
    week: int,
    group: str | None = None,
    aggregator: GameAggregator = Depends(get_aggregator),
):
    week_filter = WeekFilter(year=year, week=week, type=season_type, group=group)
    return _render_scoreboard(request, aggregator, week_filter)


@app.post(
    "/cfb/year/{year}/type/{season_type}/week/{week}",
    response_model=WeekGamesResponse,
)
def week_games(
    request: Request,
    year: int,
    season_type: int,
    week: int,
    group: str | None = None,
    aggregator: GameAggregator = Depends(get_aggregator),
):
    week_filter = WeekFilter(year=year, week=week, type=season_type, group=group)
    games = aggregator.get_week_games(week_filter, source=request.url.path)
    return WeekGamesResponse(
        games=games,
        count=len(games),
        year=year,
        week=week,
        season_type=season_type,
        group=group,
    )


@app.get("/cfb/game/{game_id}")
def game_page(
    request: Request,
    game_id: str,
    as_json: str | None = Query(None, alias="json"),
    aggregator: GameAggregator = Depends(get_aggregator),
):
    detail = aggregator.get_game_detail(game_id, new_cache_token())
    if _is_truthy(as_json):
        return JSONResponse(content=detail.model_dump(mode="json"))
    template = (
        "pregame.html"
        if isinstance(detail, ScheduledDetail)
        else "game.html"
    )
    return templates.TemplateResponse(
        request,
        template,
        {
            "game_data": detail,
        },
    )


@app.post("/cfb/game/{game_id}")
def game_play_by_play(
    game_id: str, aggregator: GameAggregator = Depends(get_aggregator)
):
    detail = aggregator.get_play_by_play(game_id)
    return JSONResponse(content=detail.model_dump(mode="json"))


@app.get("/cfb/year/{year}/team/{team_id}")
def team_page(
    request: Request,
    year: int,
    team_id: str,
    as_json: str | None = Query(None, alias="json"),
    aggregator: GameAggregator = Depends(get_aggregator),
):
    team = aggregator.get_team_detail(year, team_id)
    if _is_truthy(as_json):
        return JSONResponse(content=team.model_dump(mode="json"))
    return templates.TemplateResponse(
        request,
        "team.html",
        {"team_data": team, "season": year},
    )


@app.get("/api/logs")
def api_logs(limit: int = 100, level: str | None = None):
    try:
        entries = get_log_handler().entries(limit=limit, min_level=level)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"entries": entries}
