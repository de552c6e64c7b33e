"""
WebSocket connection handling for the Shithead game.
"""

import logging
from typing import Any, Dict, Optional, Set

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from ..errors import INTERNAL_ERROR, INVALID_EVENT, INVALID_MOVE, GameError
from ..session import SessionRegistry
from .events import (
    CheckPlayableEvent, CheckPlayableResultEvent, JoinGameEvent, PingEvent,
    PlayCardsEvent, PongEvent, TakePileEvent, create_error_event,
    parse_inbound_event
)

logger = logging.getLogger(__name__)


class WebSocketConnection:
    """Adapts a FastAPI WebSocket to the session's ``send(message)`` interface."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    async def send(self, message: Dict[str, Any]) -> None:
        await self.websocket.send_text(orjson.dumps(message).decode())


class GameSocketHandler:
    """Runs one client connection: parses inbound events and answers the sender."""

    def __init__(self, registry: SessionRegistry, websocket: WebSocket):
        self.registry = registry
        self.websocket = websocket
        self.connection = WebSocketConnection(websocket)
        self.game_ids: Set[str] = set()

    async def run(self) -> None:
        """Main receive loop; returns when the client goes away."""
        await self.websocket.accept()
        logger.info("WebSocket connection accepted")

        try:
            while True:
                message = await self.websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))

                raw_data = message.get("text")
                if raw_data is None:
                    logger.warning("Rejected binary frame")
                    await self.send_error(INVALID_EVENT, "Messages must be JSON text frames")
                    continue
                await self.handle_raw(raw_data)
        except WebSocketDisconnect:
            logger.info("WebSocket disconnected")
        finally:
            for game_id in self.game_ids:
                self.registry.disconnect(game_id, self.connection)
                logger.info(f"Connection removed from game {game_id}")

    async def handle_raw(self, raw_data: str) -> None:
        try:
            event = parse_inbound_event(orjson.loads(raw_data))
        except (orjson.JSONDecodeError, ValueError) as e:
            logger.warning(f"Rejected malformed message: {e}")
            await self.send_error(INVALID_EVENT, str(e))
            return

        try:
            await self.handle_event(event)
        except GameError as e:
            await self.send_error(e.code, e.message)
        except Exception as e:
            logger.exception(f"Error handling {event.type.value}: {e}")
            await self.send_error(INTERNAL_ERROR, "Internal server error")

    async def handle_event(self, event) -> None:
        """Handle an inbound event."""
        if isinstance(event, JoinGameEvent):
            await self.handle_join(event)
        elif isinstance(event, PlayCardsEvent):
            await self.handle_play(event)
        elif isinstance(event, TakePileEvent):
            await self.handle_take_pile(event)
        elif isinstance(event, CheckPlayableEvent):
            await self.handle_check_playable(event)
        elif isinstance(event, PingEvent):
            await self.connection.send(PongEvent().to_message())
        else:
            raise ValueError(f"Unhandled event type: {type(event)}")

    async def handle_join(self, event: JoinGameEvent) -> None:
        await self.registry.connect(event.game_id, event.player_id, self.connection)
        self.game_ids.add(event.game_id)

    async def handle_play(self, event: PlayCardsEvent) -> None:
        logger.info(f"🎮 Play event from {event.player_id}: {event.card_ids}")
        success = await self.registry.apply_play(event.game_id, event.player_id, event.card_ids)
        if not success:
            await self.send_error(INVALID_MOVE, "Invalid move")

    async def handle_take_pile(self, event: TakePileEvent) -> None:
        await self.registry.apply_take_pile(event.game_id, event.player_id)

    async def handle_check_playable(self, event: CheckPlayableEvent) -> None:
        is_playable = await self.registry.check_playable(event.game_id, event.player_id)
        await self.connection.send(
            CheckPlayableResultEvent(game_id=event.game_id, is_playable=is_playable).to_message()
        )

    async def send_error(self, code: str, message: Optional[str] = None) -> None:
        await self.connection.send(create_error_event(code, message or code).to_message())
