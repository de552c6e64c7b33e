"""FastAPI main application for the Shithead game backend"""

import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .errors import GAME_NOT_FOUND, GameError
from .rules import RuleConfig, create_rules
from .serialization import serialize_lobby_player
from .session import SessionRegistry
from .ws.server import GameSocketHandler

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class CreateGameRequest(BaseModel):
    playerNames: List[str] = Field(default_factory=list)
    gameId: Optional[str] = Field(default=None, min_length=1, max_length=50)


class JoinGameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=30)


class StartGameRequest(BaseModel):
    seed: Optional[int] = None


def rules_from_env() -> RuleConfig:
    """Build rules, letting TURN_TIMEOUT override the turn length in seconds."""
    overrides = {}
    if os.getenv("TURN_TIMEOUT"):
        overrides["turn_timeout"] = float(os.environ["TURN_TIMEOUT"])
    return create_rules(**overrides)


def create_app(rules: Optional[RuleConfig] = None) -> FastAPI:
    registry = SessionRegistry(rules or rules_from_env())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await registry.shutdown()

    app = FastAPI(title="Shithead Card Game API", version="1.0.0", lifespan=lifespan)
    app.state.registry = registry

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GameError)
    async def game_error_handler(request: Request, exc: GameError):
        status_code = 404 if exc.code == GAME_NOT_FOUND else 400
        return JSONResponse(status_code=status_code, content={"error": exc.message, "code": exc.code})

    @app.get("/")
    async def root():
        return {"message": "Shithead Card Game API", "version": "1.0.0"}

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "games": len(registry),
            "connections": registry.connection_count(),
        }

    @app.post("/games", status_code=201)
    async def create_game(body: Optional[CreateGameRequest] = None):
        body = body or CreateGameRequest()
        session = registry.create_session(body.playerNames, body.gameId)
        return {
            "gameId": session.game_id,
            "players": [serialize_lobby_player(p) for p in session.lobby_players],
        }

    @app.post("/games/{game_id}/join")
    async def join_game(game_id: str, body: JoinGameRequest):
        player = await registry.join_session(game_id, body.name)
        return {"gameId": game_id, "player": serialize_lobby_player(player)}

    @app.post("/games/{game_id}/start")
    async def start_game(game_id: str, body: Optional[StartGameRequest] = None):
        seed = body.seed if body else None
        state = await registry.start_session(game_id, seed)
        return {"gameId": game_id, "state": state}

    @app.get("/games/{game_id}/state")
    async def get_game_state(game_id: str):
        return await registry.get_snapshot(game_id)

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        await GameSocketHandler(registry, websocket).run()

    return app


app = create_app()
