"""
State serialization utilities.
"""

from typing import Any, Dict, List

from .models import Card, CardZone, GameState, LobbyPlayer, Player


def serialize_card(card: Card) -> Dict[str, str]:
    return {"suit": card.suit, "rank": card.rank, "id": card.id}


def serialize_zone(zone: CardZone) -> List[Dict[str, str]]:
    return [serialize_card(card) for card in zone]


def serialize_player(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "hand": serialize_zone(player.hand),
        "faceUp": serialize_zone(player.face_up),
        "faceDown": serialize_zone(player.face_down),
        "isOut": player.is_out,
    }


def serialize_state(state: GameState) -> Dict[str, Any]:
    """
    Serialize game state for transmission to clients.

    The result is a plain copy; later mutations of the state do not leak
    into a snapshot that is already being broadcast.
    """
    return {
        "players": [serialize_player(player) for player in state.players],
        "deck": serialize_zone(state.deck),
        "deckCount": len(state.deck),
        "pile": serialize_zone(state.pile),
        "discardCount": len(state.discard),
        "currentPlayerIndex": state.current_player_index,
        "lastPlayedPlayerId": state.last_played_player_id,
        "lastPlayedCardRank": state.last_played_card_rank,
        "status": state.status,
        "winnerId": state.winner_id,
        "isAnotherTurn": state.is_another_turn,
    }


def serialize_lobby_player(player: LobbyPlayer) -> Dict[str, str]:
    """Serialize player for lobby player list."""
    return {"id": player.id, "name": player.name}


def get_lobby_summary(game_id: str, status: str, players: List[LobbyPlayer]) -> Dict[str, Any]:
    """Get public information about a game that has not started yet."""
    return {
        "gameId": game_id,
        "status": status,
        "players": [serialize_lobby_player(player) for player in players],
    }
