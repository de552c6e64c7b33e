"""
WebSocket event models and validation.
"""

from enum import Enum
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class EventType(str, Enum):
    """Inbound event types."""
    JOIN_GAME = "JOIN_GAME"
    PLAY_CARDS = "PLAY_CARDS"
    TAKE_PILE = "TAKE_PILE"
    CHECK_PLAYABLE = "CHECK_PLAYABLE"
    PING = "PING"


class OutboundEventType(str, Enum):
    """Outbound event types."""
    CONNECTED = "CONNECTED"
    GAME_STATE_UPDATE = "GAME_STATE_UPDATE"
    TURN_TIMER_UPDATE = "TURN_TIMER_UPDATE"
    TURN_TIMER_EXPIRED = "TURN_TIMER_EXPIRED"
    PLAYER_JOINED = "PLAYER_JOINED"
    CHECK_PLAYABLE_RESULT = "CHECK_PLAYABLE_RESULT"
    ERROR = "ERROR"
    PONG = "PONG"


class WireModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_message(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# Inbound event models
class BaseEvent(WireModel):
    """Base event model."""
    type: EventType


class JoinGameEvent(BaseEvent):
    """Attach this connection to a game."""
    type: EventType = EventType.JOIN_GAME
    game_id: str = Field(..., min_length=1, max_length=50)
    player_id: str = Field(..., min_length=1)


class PlayCardsEvent(BaseEvent):
    """Play cards event."""
    type: EventType = EventType.PLAY_CARDS
    game_id: str = Field(..., min_length=1, max_length=50)
    player_id: str = Field(..., min_length=1)
    card_ids: List[str] = Field(..., min_length=1, max_length=4)


class TakePileEvent(BaseEvent):
    type: EventType = EventType.TAKE_PILE
    game_id: str = Field(..., min_length=1, max_length=50)
    player_id: str = Field(..., min_length=1)


class CheckPlayableEvent(BaseEvent):
    type: EventType = EventType.CHECK_PLAYABLE
    game_id: str = Field(..., min_length=1, max_length=50)
    player_id: str = Field(..., min_length=1)


class PingEvent(BaseEvent):
    type: EventType = EventType.PING


# Union type for all inbound events
InboundEvent = Union[
    JoinGameEvent,
    PlayCardsEvent,
    TakePileEvent,
    CheckPlayableEvent,
    PingEvent,
]


# Outbound event models
class ConnectedEvent(WireModel):
    """Join confirmation event."""
    type: OutboundEventType = OutboundEventType.CONNECTED
    game_id: str
    player_id: str


class GameStateUpdateEvent(WireModel):
    """Full state event."""
    type: OutboundEventType = OutboundEventType.GAME_STATE_UPDATE
    game_id: str
    state: Dict[str, Any]


class TurnTimerUpdateEvent(WireModel):
    type: OutboundEventType = OutboundEventType.TURN_TIMER_UPDATE
    player_id: str
    time_remaining_ms: int


class TurnTimerExpiredEvent(WireModel):
    type: OutboundEventType = OutboundEventType.TURN_TIMER_EXPIRED
    player_id: str


class PlayerJoinedEvent(WireModel):
    type: OutboundEventType = OutboundEventType.PLAYER_JOINED
    player: Dict[str, str]


class CheckPlayableResultEvent(WireModel):
    type: OutboundEventType = OutboundEventType.CHECK_PLAYABLE_RESULT
    game_id: str
    is_playable: bool


class ErrorEvent(WireModel):
    """Error event."""
    type: OutboundEventType = OutboundEventType.ERROR
    code: str
    message: str


class PongEvent(WireModel):
    type: OutboundEventType = OutboundEventType.PONG


def parse_inbound_event(data: Dict[str, Any]) -> InboundEvent:
    """
    Parse raw event data into appropriate event model.

    Args:
        data: Raw event data from WebSocket

    Returns:
        Parsed event model

    Raises:
        ValueError: If event type is invalid or data is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")

    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    event_map = {
        EventType.JOIN_GAME: JoinGameEvent,
        EventType.PLAY_CARDS: PlayCardsEvent,
        EventType.TAKE_PILE: TakePileEvent,
        EventType.CHECK_PLAYABLE: CheckPlayableEvent,
        EventType.PING: PingEvent,
    }

    event_class = event_map[event_type]

    try:
        return event_class.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid event data: {e.errors()[0]['msg']}")


def create_error_event(code: str, message: str) -> ErrorEvent:
    """Create an error event."""
    return ErrorEvent(code=code, message=message)


def create_state_update_event(game_id: str, state: Dict[str, Any]) -> GameStateUpdateEvent:
    """Create a full state event."""
    return GameStateUpdateEvent(game_id=game_id, state=state)


def create_timer_update_event(player_id: str, time_remaining_ms: int) -> TurnTimerUpdateEvent:
    return TurnTimerUpdateEvent(player_id=player_id, time_remaining_ms=time_remaining_ms)
