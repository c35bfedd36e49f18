import contextlib
import functools
import logging
import time
from typing import Any, Awaitable, Callable

from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.datastructures import UploadFile
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

import config
import data
from domain.feed import FeedRecordError
from domain.models import Menu, WeekNumber
from domain.repository import MenuNotFound, MenuRepository
from domain.weeks import week_number
import services


logger = logging.getLogger(__name__)


CONFIG = config.Config()


Payload = Menu | list[Menu]


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def aJSONResponse(route: Callable[..., Awaitable[Payload | tuple[Payload, int]]]):
    @functools.wraps(route)
    async def wrapper(*args: Any, **kwargs: Any) -> JSONResponse:
        resp = await route(*args, **kwargs)
        if not isinstance(resp, tuple):
            payload, code = resp, 200
        else:
            payload, code = resp
        if isinstance(payload, list):
            return JSONResponse([m.to_dict() for m in payload], status_code=code)
        return JSONResponse(payload.to_dict(), status_code=code)

    return wrapper


class RequestLogger(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response


def requested_week(request: Request) -> WeekNumber:
    return request.query_params.get("weekNumber") or week_number()


async def _stored(request: Request, week: WeekNumber) -> Menu | tuple[Menu, int]:
    repo: MenuRepository = request.app.state.repo
    try:
        return await services.stored_menu(week, repository=repo)
    except MenuNotFound as e:
        return Menu.failed(week, str(e)), 404


async def _from_feed(request: Request, week: WeekNumber) -> Menu | tuple[Menu, int]:
    cfg: config.Config = request.app.state.config
    try:
        return await services.feed_menu(
            week,
            feed=request.app.state.feed,
            suffixes=cfg.boilerplate_suffixes,
        )
    except (FeedRecordError, data.FeedError) as e:
        logger.error("Feed lookup for week %s failed: %s", week, e)
        return Menu.failed(week, str(e)), 500


@aJSONResponse
async def current_menu(request: Request) -> Menu | tuple[Menu, int]:
    week = requested_week(request)
    cfg: config.Config = request.app.state.config
    match cfg.menu_source:
        case config.MenuSource.feed:
            return await _from_feed(request, week)
        case config.MenuSource.document:
            return await _stored(request, week)


@aJSONResponse
async def menu_for_week(request: Request) -> Menu | tuple[Menu, int]:
    return await _stored(request, request.path_params["week"])


@aJSONResponse
async def upload_menus(request: Request) -> list[Menu] | tuple[Menu, int]:
    cfg: config.Config = request.app.state.config
    files: list[tuple[str, bytes]] = []
    async with request.form() as form:
        for _, value in form.multi_items():
            if isinstance(value, UploadFile):
                files.append((value.filename or "", await value.read()))

    if not files:
        return Menu.failed(None, "No files uploaded"), 400

    try:
        return await services.menus_from_uploads(
            files,
            repository=request.app.state.repo,
            uploads_dir=cfg.uploads_dir,
        )
    except data.InvalidSlideDeck as e:
        return Menu.failed(None, str(e)), 400


def create_app(cfg: config.Config, *, feed: data.FeedClient | None = None) -> Starlette:
    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        configure_logging(cfg.log_level)
        cfg.menus_dir.mkdir(parents=True, exist_ok=True)
        cfg.uploads_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Started lunch broker, serving %s menus", cfg.menu_source.value)
        yield
        if cfg.menu_source == config.MenuSource.feed:
            await app.state.feed.aclose()

    routes = [Route("/menu", current_menu, methods=["GET"])]
    if cfg.menu_source == config.MenuSource.document:
        routes += [
            Route("/menu", upload_menus, methods=["POST"]),
            Route("/menu/{week}", menu_for_week, methods=["GET"]),
        ]

    app = Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=routes,
        middleware=[Middleware(RequestLogger)],
        lifespan=lifespan,
    )
    app.state.config = cfg
    app.state.repo = MenuRepository(cfg.menus_dir)
    if cfg.menu_source == config.MenuSource.feed:
        app.state.feed = (
            data.FeedClient(cfg.feed_url, timeout=cfg.feed_timeout)
            if feed is None
            else feed
        )
    return app


app = create_app(CONFIG)
