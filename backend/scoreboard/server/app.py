from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route

from scoreboard.logic.controller import GameController
from scoreboard.server.settings import ScoreboardServerSettings
from scoreboard.server.types import ActionRequest
from shared.logging import setup_logging
from shared.storage import LocalSnapshotStorage

logger = structlog.get_logger()

if TYPE_CHECKING:
    from starlette.requests import Request

_MAX_REQUEST_BODY_SIZE = 1024


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


async def get_game(request: Request) -> JSONResponse:
    controller: GameController = request.app.state.controller
    return JSONResponse(controller.view().model_dump(mode="json"))


async def get_snapshot(request: Request) -> JSONResponse:
    controller: GameController = request.app.state.controller
    return JSONResponse(controller.snapshot().model_dump(mode="json"))


async def post_action(request: Request) -> JSONResponse:
    controller: GameController = request.app.state.controller

    try:
        raw_body = await request.body()
        if len(raw_body) > _MAX_REQUEST_BODY_SIZE:
            return JSONResponse({"error": "Request body too large"}, status_code=413)
        action_request = ActionRequest.model_validate(json.loads(raw_body))
    except (ValueError, TypeError, UnicodeDecodeError, ValidationError):  # fmt: skip
        return JSONResponse({"error": "Invalid request body"}, status_code=400)

    accepted = controller.dispatch(action_request.action, **action_request.arguments())
    return JSONResponse({"accepted": accepted, "view": controller.view().model_dump(mode="json")})


def create_app(
    settings: ScoreboardServerSettings | None = None,
    controller: GameController | None = None,
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = ScoreboardServerSettings()

    if controller is None:
        storage = LocalSnapshotStorage(settings.snapshot_path)
        controller = GameController.restore(storage, settings.game_settings())

    routes = [
        Route("/health", health, methods=["GET"]),
        Route("/game", get_game, methods=["GET"]),
        Route("/game/snapshot", get_snapshot, methods=["GET"]),
        Route("/game/actions", post_action, methods=["POST"]),
    ]

    app = Starlette(routes=routes)
    app.state.settings = settings
    app.state.controller = controller

    logger.info("scoreboard server ready", phase=controller.phase, round_number=controller.ledger.round_number)
    return app


def get_app() -> Starlette:  # pragma: no cover
    """ASGI application factory for production use (e.g., uvicorn --factory)."""
    settings = ScoreboardServerSettings()
    setup_logging(log_dir=settings.log_dir)
    return create_app(settings=settings)
