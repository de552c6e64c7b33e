"""
Rank comparison logic.
"""

from typing import Iterable, Optional

from .constants import RANK_VALUES
from .models import Card, CardZone


def get_rank_value(rank: str) -> int:
    """Get the numeric strength of a rank (2 lowest, JOKER highest)."""
    try:
        return RANK_VALUES[rank]
    except KeyError:
        raise ValueError(f"Invalid rank: {rank}")


def compare_ranks(rank_a: str, rank_b: str) -> int:
    """
    Compare two ranks.

    Returns:
        < 0 if rank_a is lower than rank_b
        0 if ranks are equal
        > 0 if rank_a is higher than rank_b
    """
    return get_rank_value(rank_a) - get_rank_value(rank_b)


def is_at_least(rank_a: str, rank_b: str) -> bool:
    """Check if rank_a is equal to or higher than rank_b."""
    return compare_ranks(rank_a, rank_b) >= 0


def is_at_most(rank_a: str, rank_b: str) -> bool:
    return compare_ranks(rank_a, rank_b) <= 0


def common_rank(cards: Iterable[Card]) -> Optional[str]:
    """Return the shared rank of the cards, or None if empty or mixed."""
    ranks = {card.rank for card in cards}
    if len(ranks) != 1:
        return None
    return ranks.pop()


def count_top_run(pile: CardZone) -> int:
    """Count consecutive cards from the top of the pile sharing the top rank."""
    top = pile.top
    if top is None:
        return 0
    run = 0
    for card in reversed(pile.cards):
        if card.rank != top.rank:
            break
        run += 1
    return run
