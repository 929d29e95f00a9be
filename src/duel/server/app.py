from __future__ import annotations

import contextlib
import json
from http import HTTPStatus
from typing import TYPE_CHECKING, Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.routing import Route

from duel.logic.enums import ErrorCode
from duel.logic.service import DuelService
from duel.server.settings import DuelServerSettings
from duel.server.types import CreateGameRequest, SubmitMoveRequest
from ladder.standings import list_games, top_players
from shared.db import Database, SqliteStore
from shared.logging import setup_logging

logger = structlog.get_logger()

T = TypeVar("T", bound=BaseModel)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from starlette.requests import Request

    from duel.logic.types import DuelResponse
    from shared.storage import KeyValueStore

# set by the authenticating proxy in front of this service
PLAYER_ID_HEADER = "X-Player-Id"

_ERROR_STATUS: dict[ErrorCode, HTTPStatus] = {
    ErrorCode.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorCode.NOT_PARTICIPANT: HTTPStatus.FORBIDDEN,
    ErrorCode.NOT_JOINABLE: HTTPStatus.CONFLICT,
    ErrorCode.WRONG_TURN: HTTPStatus.CONFLICT,
    ErrorCode.ALREADY_FINISHED: HTTPStatus.CONFLICT,
    ErrorCode.MISSING_OPPONENT: HTTPStatus.CONFLICT,
    ErrorCode.INVALID_MOVE: HTTPStatus.UNPROCESSABLE_ENTITY,
    ErrorCode.LOBBY_LIMIT_REACHED: HTTPStatus.TOO_MANY_REQUESTS,
}


class _BadRequest(Exception):
    def __init__(self, response: JSONResponse) -> None:
        self.response = response


def _error(message: str, status: HTTPStatus) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status)


def _caller(request: Request) -> str:
    player_id = request.headers.get(PLAYER_ID_HEADER, "").strip()
    if not player_id:
        raise _BadRequest(_error("Authentication required", HTTPStatus.UNAUTHORIZED))
    return player_id


async def _parse_body(request: Request, model: type[T]) -> T:
    raw_body = await request.body()
    if not raw_body.strip():
        body: Any = {}
    else:
        try:
            body = json.loads(raw_body)
        except ValueError:
            raise _BadRequest(_error("Invalid JSON body", HTTPStatus.UNPROCESSABLE_ENTITY)) from None
    if not isinstance(body, dict):
        raise _BadRequest(_error("JSON body must be an object", HTTPStatus.UNPROCESSABLE_ENTITY))
    try:
        return model(**body)
    except ValidationError as e:
        raise _BadRequest(_error(str(e), HTTPStatus.UNPROCESSABLE_ENTITY)) from e


def _respond(response: DuelResponse, success_status: HTTPStatus = HTTPStatus.OK) -> JSONResponse:
    if response.success:
        status = success_status
    else:
        status = _ERROR_STATUS.get(response.error, HTTPStatus.BAD_REQUEST) if response.error else HTTPStatus.BAD_REQUEST
    return JSONResponse(response.model_dump(mode="json"), status_code=status)


def _service(request: Request) -> DuelService:
    return request.app.state.service


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


async def get_games(request: Request) -> JSONResponse:
    games = list_games(_service(request).games)
    return JSONResponse({"games": [g.model_dump(mode="json") for g in games]})


async def get_game(request: Request) -> JSONResponse:
    game_id: int = request.path_params["game_id"]
    view = _service(request).get_game(game_id)
    if view is None:
        return _error(f"game {game_id} was not found", HTTPStatus.NOT_FOUND)
    return JSONResponse(view.model_dump(mode="json"))


async def create_game(request: Request) -> JSONResponse:
    try:
        caller = _caller(request)
        req = await _parse_body(request, CreateGameRequest)
    except _BadRequest as e:
        return e.response
    response = _service(request).create_game(caller, metadata=req.metadata, play_vs_ai=req.play_vs_ai)
    return _respond(response, HTTPStatus.CREATED)


async def join_game(request: Request) -> JSONResponse:
    try:
        caller = _caller(request)
    except _BadRequest as e:
        return e.response
    return _respond(_service(request).join_game(caller, request.path_params["game_id"]))


async def submit_move(request: Request) -> JSONResponse:
    try:
        caller = _caller(request)
        req = await _parse_body(request, SubmitMoveRequest)
    except _BadRequest as e:
        return e.response
    response = _service(request).submit_move(caller, request.path_params["game_id"], req.uci, req.promotion)
    return _respond(response)


async def resign(request: Request) -> JSONResponse:
    try:
        caller = _caller(request)
    except _BadRequest as e:
        return e.response
    return _respond(_service(request).resign(caller, request.path_params["game_id"]))


async def leaderboard(request: Request) -> JSONResponse:
    settings: DuelServerSettings = request.app.state.settings
    raw_limit = request.query_params.get("limit")
    try:
        limit = int(raw_limit) if raw_limit is not None else settings.leaderboard_limit
    except ValueError:
        return _error("limit must be an integer", HTTPStatus.UNPROCESSABLE_ENTITY)
    players = top_players(_service(request).players, limit)
    return JSONResponse({"players": [p.model_dump(mode="json") for p in players]})


def create_app(
    settings: DuelServerSettings | None = None,
    store: KeyValueStore | None = None,
) -> Starlette:
    """
    Build the app around a DuelService configured from settings.

    Without a store, the sqlite database at settings.db_path is opened and
    closed again on shutdown.
    """
    if settings is None:  # pragma: no cover
        settings = DuelServerSettings()

    database: Database | None = None
    if store is None:
        database = Database(settings.db_path)
        database.connect()
        store = SqliteStore(database)
    service = DuelService(store, settings=settings.game_settings())

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncIterator[None]:
        yield
        if database is not None:
            database.close()
            logger.info("database closed")

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/games", get_games, methods=["GET"]),
        Route("/games", create_game, methods=["POST"]),
        Route("/games/{game_id:int}", get_game, methods=["GET"]),
        Route("/games/{game_id:int}/join", join_game, methods=["POST"]),
        Route("/games/{game_id:int}/moves", submit_move, methods=["POST"]),
        Route("/games/{game_id:int}/resign", resign, methods=["POST"]),
        Route("/leaderboard", leaderboard, methods=["GET"]),
    ]

    app = Starlette(routes=routes, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.service = service

    logger.info("duel server ready")
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory duel.server.app:get_app."""
    settings = DuelServerSettings()
    setup_logging(settings.log_format, settings.log_level)
    return create_app(settings=settings)
