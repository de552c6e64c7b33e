"""
Tests for websocket event parsing and wire format.
"""

import pytest

from shithead_engine.ws.events import (
    CheckPlayableResultEvent, EventType, JoinGameEvent, PingEvent,
    PlayCardsEvent, TurnTimerUpdateEvent, create_error_event,
    create_state_update_event, parse_inbound_event
)


def test_parse_play_cards():
    event = parse_inbound_event({
        "type": "PLAY_CARDS",
        "gameId": "ABC123",
        "playerId": "p1",
        "cardIds": ["c1", "c2"],
    })
    assert isinstance(event, PlayCardsEvent)
    assert event.type == EventType.PLAY_CARDS
    assert event.game_id == "ABC123"
    assert event.card_ids == ["c1", "c2"]


def test_parse_join_and_ping():
    event = parse_inbound_event({"type": "JOIN_GAME", "gameId": "ABC123", "playerId": "p1"})
    assert isinstance(event, JoinGameEvent)
    assert event.player_id == "p1"

    assert isinstance(parse_inbound_event({"type": "PING"}), PingEvent)


@pytest.mark.parametrize("data, fragment", [
    ([], "JSON object"),
    ({}, "Missing event type"),
    ({"type": "SHUFFLE"}, "Invalid event type"),
    ({"type": "TAKE_PILE", "gameId": "ABC123"}, "Invalid event data"),
    ({"type": "PLAY_CARDS", "gameId": "ABC123", "playerId": "p1", "cardIds": []}, "Invalid event data"),
    ({"type": "PLAY_CARDS", "gameId": "ABC123", "playerId": "p1",
      "cardIds": ["a", "b", "c", "d", "e"]}, "Invalid event data"),
])
def test_parse_rejects_bad_events(data, fragment):
    with pytest.raises(ValueError) as exc_info:
        parse_inbound_event(data)
    assert fragment in str(exc_info.value)


def test_outbound_messages_use_camel_case():
    assert create_error_event("NOT_YOUR_TURN", "Not your turn").to_message() == {
        "type": "ERROR",
        "code": "NOT_YOUR_TURN",
        "message": "Not your turn",
    }
    assert TurnTimerUpdateEvent(player_id="p1", time_remaining_ms=1500).to_message() == {
        "type": "TURN_TIMER_UPDATE",
        "playerId": "p1",
        "timeRemainingMs": 1500,
    }
    assert CheckPlayableResultEvent(game_id="G", is_playable=False).to_message() == {
        "type": "CHECK_PLAYABLE_RESULT",
        "gameId": "G",
        "isPlayable": False,
    }

    message = create_state_update_event("G", {"currentPlayerIndex": 2}).to_message()
    assert message["type"] == "GAME_STATE_UPDATE"
    assert message["state"] == {"currentPlayerIndex": 2}
