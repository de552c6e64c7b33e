"""
Shared builders for hand-crafted game states.
"""

from typing import Optional, Sequence

import pytest

from shithead_engine.constants import JOKER, JOKER_SUIT, STATUS_PLAYING
from shithead_engine.models import Card, CardZone, GameState, Player


def make_cards(ranks: Sequence[str], suit: str = '♠'):
    return [Card(suit=JOKER_SUIT if rank == JOKER else suit, rank=rank) for rank in ranks]


def build_state(
    hands: Sequence[Sequence[str]],
    pile: Sequence[str] = (),
    deck: Sequence[str] = (),
    current: int = 0,
    last_played_player_id: Optional[str] = None,
    last_played_card_rank: Optional[str] = None,
    face_up: Optional[Sequence[Sequence[str]]] = None,
    face_down: Optional[Sequence[Sequence[str]]] = None,
) -> GameState:
    players = []
    for i, hand in enumerate(hands):
        players.append(Player(
            id=f"p{i + 1}",
            name=f"Player {i + 1}",
            hand=CardZone(make_cards(hand, suit='♥')),
            face_up=CardZone(make_cards(face_up[i] if face_up else ())),
            face_down=CardZone(make_cards(face_down[i] if face_down else ())),
        ))
    if last_played_card_rank is None and pile:
        last_played_card_rank = pile[-1]
    return GameState(
        players=players,
        deck=CardZone(make_cards(deck, suit='♣')),
        pile=CardZone(make_cards(pile, suit='♦')),
        current_player_index=current,
        last_played_player_id=last_played_player_id,
        last_played_card_rank=last_played_card_rank,
        status=STATUS_PLAYING,
    )


@pytest.fixture
def make_state():
    """Factory for game states; players are p1, p2, ... in seat order."""
    return build_state


@pytest.fixture
def cards():
    return make_cards
