"""
Card shuffling and dealing utilities.
"""

import random
from collections import Counter
from typing import Iterable, List, Optional

from .constants import CARDS_PER_ZONE, JOKER, JOKER_COUNT, JOKER_SUIT, RANKS, SUITS
from .models import Card, CardZone, GameState, Player


def create_deck() -> List[Card]:
    """Create a standard 52-card deck plus two jokers, each card with a fresh id."""
    deck = []

    for suit in SUITS:
        for rank in RANKS:
            deck.append(Card(suit=suit, rank=rank))

    for _ in range(JOKER_COUNT):
        deck.append(Card(suit=JOKER_SUIT, rank=JOKER))

    return deck


def shuffle_deck(deck: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Shuffle a deck.

    Args:
        deck: Cards to shuffle
        rng: Optional random source for deterministic shuffling

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = deck.copy()
    (rng or random).shuffle(deck_copy)
    return deck_copy


def build_shuffled_deck(rng: Optional[random.Random] = None) -> List[Card]:
    return shuffle_deck(create_deck(), rng)


def deal_cards(deck: List[Card], players: List[Player]) -> CardZone:
    """
    Deal three face-down, three face-up and three hand cards to each player.

    Players are served in seat order from the head of the deck.

    Args:
        deck: Shuffled deck of cards
        players: Players to deal to, in seat order

    Returns:
        The remaining cards as the draw pile
    """
    source = CardZone(deck)
    needed = CARDS_PER_ZONE * 3 * len(players)
    if needed > len(source):
        raise ValueError(f"Cannot deal {needed} cards from a deck of {len(source)}")

    for player in players:
        player.face_down.extend(source.draw(CARDS_PER_ZONE))
        player.face_up.extend(source.draw(CARDS_PER_ZONE))
        player.hand.extend(source.draw(CARDS_PER_ZONE))

    return source


def choose_starting_player(player_count: int, rng: Optional[random.Random] = None) -> int:
    """Pick the starting seat uniformly at random."""
    return (rng or random).randrange(player_count)


def validate_deck_integrity(state: GameState, expected_ids: Iterable[str]) -> bool:
    """
    Validate that all cards are accounted for and no duplicates exist.

    Args:
        state: Game state to validate
        expected_ids: Ids of every card that was dealt

    Returns:
        True if every expected card sits in exactly one zone
    """
    return Counter(state.all_card_ids()) == Counter(expected_ids)
