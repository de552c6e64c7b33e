"""
Special card effects and turn control.
"""

import logging
from typing import Optional

from .constants import (
    BURN_RANK, EFFECT_FOUR_BURN, EFFECT_REPLAY, EFFECT_TEN_BURN, HAND_SIZE,
    REPLAY_RANK
)
from .models import GameState, Player
from .validate import should_burn_pile

logger = logging.getLogger(__name__)


def refill_hand(player: Player, state: GameState) -> None:
    """
    Top the player's hand back up after a play or a pile take.

    Draws from the deck until the hand holds three cards. An empty hand then
    picks up every face-up card, or failing that one face-down card. A player
    left with nothing in any zone is out.
    """
    missing = HAND_SIZE - len(player.hand)
    if missing > 0:
        player.hand.extend(state.deck.draw(missing))

    if not player.hand and player.face_up:
        player.hand.extend(player.face_up.take_all())

    if not player.hand and player.face_down:
        player.hand.extend(player.face_down.draw(1))

    if player.has_no_cards():
        player.is_out = True


def burn_pile(state: GameState) -> int:
    """Move the whole pile to the discard zone and forget the last rank."""
    burned = state.pile.take_all()
    state.discard.extend(burned)
    state.last_played_card_rank = None
    return len(burned)


def advance_turn(state: GameState) -> None:
    """Move to the next seat still in play unless the player earned another turn."""
    if state.is_another_turn:
        return

    n = len(state.players)
    next_index = (state.current_player_index + 1) % n
    for _ in range(n):
        if not state.players[next_index].is_out:
            state.current_player_index = next_index
            return
        next_index = (next_index + 1) % n

    raise RuntimeError("No player left in play")


def apply_special_effect(state: GameState, player: Player, rank: str) -> Optional[str]:
    """
    Apply the effect of the rank just played, if any.

    At most one effect fires: a 5 grants a replay, a 10 burns the pile and
    grants a replay, otherwise four of a kind on top burns the pile and grants
    a replay.

    Returns:
        The effect name, or None when the play had no special effect
    """
    if rank == REPLAY_RANK:
        logger.info(f"[SpecialRule] {player.name} played 5 - gets another turn")
        state.is_another_turn = True
        return EFFECT_REPLAY

    if rank == BURN_RANK:
        count = burn_pile(state)
        logger.info(f"[SpecialRule] {player.name} played 10 - burned {count} cards, gets another turn")
        state.is_another_turn = True
        return EFFECT_TEN_BURN

    if should_burn_pile(state.pile):
        count = burn_pile(state)
        logger.info(f"[BurnCheck] four of a kind - burned {count} cards, {player.name} gets another turn")
        state.is_another_turn = True
        return EFFECT_FOUR_BURN

    return None


def check_win_condition(player: Player) -> bool:
    return player.has_no_cards()
