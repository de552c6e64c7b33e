"""
Move legality for card plays.

Both predicates share a single rule order:

1. the cards must be non-empty and share one rank;
2. right after the same player's 5, anything goes;
3. on an empty pile, one card or a four-of-a-kind;
4. several cards only when they complete a four-card run of the top rank;
5. an active 8-constraint allows only 8 or 9;
6. a 7 allows ranks up to 7 and jokers;
7. a 3 allows only jokers;
8. wild ranks (2, 3, 5, 10, joker) are always playable;
9. anything goes on a joker;
10. otherwise the rank must be at least the top rank.
"""

import logging
from typing import Dict, List, Optional

from .comparator import common_rank, count_top_run, is_at_least, is_at_most
from .constants import (
    ABSORBED_RANK, BURN_RUN_LENGTH, EIGHT_ESCAPE_RANKS, EIGHT_RANK, JOKER,
    REPLAY_RANK, SEVEN_RANK, WILD_RANKS
)
from .models import Card, CardZone, GameState

logger = logging.getLogger(__name__)


def is_eight_constraint_active(state: GameState, player_id: Optional[str] = None) -> bool:
    """
    Check whether the acting player is restricted by an 8.

    The constraint holds when the pile top is an 8 and the most recent play
    came from the seat immediately before the acting player.

    Args:
        state: Current game state
        player_id: Acting player; defaults to the current seat
    """
    top = state.pile.top
    if top is None or top.rank != EIGHT_RANK or not state.players:
        return False

    seat = state.seat_of(player_id) if player_id else state.current_player_index
    if seat < 0:
        return False
    previous = state.players[(seat - 1 + len(state.players)) % len(state.players)]
    return state.last_played_player_id == previous.id


def is_after_five(state: GameState, player_id: str) -> bool:
    """Check whether the player is inside the bonus window of their own 5."""
    return (
        state.last_played_card_rank == REPLAY_RANK
        and state.last_played_player_id == player_id
    )


def should_burn_pile(pile: CardZone) -> bool:
    """True iff the top four cards of the pile share a rank."""
    if len(pile) < BURN_RUN_LENGTH:
        return False
    return common_rank(pile.cards[-BURN_RUN_LENGTH:]) is not None


def cards_needed_for_burn(pile: CardZone) -> int:
    return BURN_RUN_LENGTH - count_top_run(pile)


def is_valid_move(
    cards: List[Card],
    top_card: Optional[Card],
    state: GameState,
    is_after_five_window: bool = False,
    player_id: Optional[str] = None
) -> bool:
    """
    Check whether a specific group of cards may be played now.

    Args:
        cards: Cards the player wants to play
        top_card: Current top of the pile, None when empty
        state: Current game state
        is_after_five_window: Whether the acting player just played a 5
        player_id: Acting player; defaults to the current seat

    Returns:
        True if the play is legal
    """
    rank = common_rank(cards)
    if rank is None:
        return False

    if is_after_five_window:
        return True

    if top_card is None:
        return len(cards) in (1, BURN_RUN_LENGTH)

    if len(cards) > 1:
        return rank == top_card.rank and len(cards) == cards_needed_for_burn(state.pile)

    if is_eight_constraint_active(state, player_id):
        return rank in EIGHT_ESCAPE_RANKS

    if top_card.rank == SEVEN_RANK:
        return rank == JOKER or is_at_most(rank, SEVEN_RANK)

    if top_card.rank == ABSORBED_RANK:
        return rank == JOKER

    if rank in WILD_RANKS:
        return True

    if top_card.rank == JOKER:
        return True

    return is_at_least(rank, top_card.rank)


def candidate_plays(hand: CardZone, pile: CardZone) -> List[List[Card]]:
    """List every single card plus the group that would complete a burn."""
    candidates = [[card] for card in hand]

    top = pile.top
    if top is not None:
        needed = cards_needed_for_burn(pile)
        matching = [card for card in hand if card.rank == top.rank]
        if 1 < needed <= len(matching):
            candidates.append(matching[:needed])

    return candidates


def is_playable(
    hand: CardZone,
    top_card: Optional[Card],
    state: GameState,
    player_id: str
) -> bool:
    """
    Check whether the player has any legal move at all.

    A False result means the caller should take the pile, which becomes a
    skip when the 8-constraint is active.
    """
    if not hand:
        return False

    after_five = is_after_five(state, player_id)
    constrained = is_eight_constraint_active(state, player_id)
    if constrained:
        logger.info(f"[8-Constraint] checking if player {player_id} holds an 8 or 9")

    for cards in candidate_plays(hand, state.pile):
        if is_valid_move(cards, top_card, state, after_five, player_id):
            return True
    return False


def summarize_hand(hand: CardZone) -> Dict[str, int]:
    """Count cards per rank, used in rejection logs."""
    summary: Dict[str, int] = {}
    for card in hand:
        summary[card.rank] = summary.get(card.rank, 0) + 1
    return summary
