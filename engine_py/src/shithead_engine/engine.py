"""Main game engine: dealing, playing cards and taking the pile"""

import logging
import random
from typing import List, Optional

from .constants import ABSORBED_RANK, STATUS_FINISHED, STATUS_PLAYING
from .effects import advance_turn, apply_special_effect, check_win_condition, refill_hand
from .errors import CARD_NOT_IN_HAND, GAME_NOT_STARTED, INVALID_PLAYER, raise_error
from .models import GameState, LobbyPlayer, Player
from .shuffle import build_shuffled_deck, choose_starting_player, deal_cards
from .validate import (
    is_after_five, is_eight_constraint_active, is_playable, is_valid_move,
    summarize_hand
)

logger = logging.getLogger(__name__)


def start_game(lobby_players: List[LobbyPlayer], seed: Optional[int] = None) -> GameState:
    """
    Deal a fresh game for the given lobby.

    Args:
        lobby_players: Players in seat order; their ids are kept
        seed: Optional seed for a deterministic shuffle and starting seat

    Returns:
        A game state in the playing status
    """
    rng = random.Random(seed) if seed is not None else None
    players = [Player(id=lp.id, name=lp.name) for lp in lobby_players]
    deck = deal_cards(build_shuffled_deck(rng), players)

    state = GameState(
        players=players,
        deck=deck,
        current_player_index=choose_starting_player(len(players), rng),
        status=STATUS_PLAYING,
    )
    logger.info(f"[StartGame] {len(players)} players, {state.current_player.name} starts, {len(deck)} cards left to draw")
    return state


def _get_active_player(state: GameState, player_id: str) -> Player:
    if state.status != STATUS_PLAYING:
        raise_error(GAME_NOT_STARTED, f"Game is not in progress (status: {state.status})")
    player = state.get_player(player_id)
    if player is None or player.is_out:
        logger.error(f"[PlayCards] Invalid player or player is out: {player_id}")
        raise_error(INVALID_PLAYER, "Invalid player")
    return player


def play_cards(state: GameState, player_id: str, card_ids: List[str]) -> bool:
    """
    Play cards from a player's hand onto the pile.

    Returns False, leaving the state untouched, when the move is not legal;
    the player keeps the turn and must choose again.

    Raises:
        GameError: INVALID_PLAYER for an unknown or finished player,
            CARD_NOT_IN_HAND when an id is not in the player's hand
    """
    player = _get_active_player(state, player_id)

    if len(set(card_ids)) != len(card_ids):
        logger.error(f"[PlayCards] Duplicate card ids from player {player.name}: {card_ids}")
        raise_error(CARD_NOT_IN_HAND, "Each card can only be played once")

    cards = []
    for card_id in card_ids:
        card = player.hand.find(card_id)
        if card is None:
            logger.error(f"[PlayCards] Card not in hand: {card_id} for player {player.name}")
            raise_error(CARD_NOT_IN_HAND, "Card not in hand")
        cards.append(card)

    ranks = ", ".join(card.rank for card in cards)
    top_card = state.pile.top
    after_five = is_after_five(state, player_id)

    if not is_valid_move(cards, top_card, state, after_five, player_id):
        logger.warning(
            f"[PlayCards] Invalid move by {player.name}. Attempted: [{ranks}] on top: "
            f"{top_card.rank if top_card else 'Empty'} holding {summarize_hand(player.hand)}"
        )
        return False

    state.is_another_turn = False
    state.pile.extend(player.hand.remove_ids([card.id for card in cards]))
    state.last_played_player_id = player_id
    state.last_played_card_rank = cards[0].rank
    logger.info(f"[PlayCards] {player.name} played [{ranks}]")

    effect = apply_special_effect(state, player, cards[0].rank)
    if effect:
        logger.info(f"[PlayCards] {player.name} triggered {effect}")
    refill_hand(player, state)

    if check_win_condition(player):
        logger.info(f"[GameEnd] Player {player.name} has won the game!")
        state.status = STATUS_FINISHED
        state.winner_id = player.id
        return True

    advance_turn(state)
    return True


def take_pile(state: GameState, player_id: str) -> bool:
    """
    Pick up the pile, or skip the turn when the 8-constraint is active.

    A 3 on top of the pile is discarded rather than picked up.

    Returns:
        True if the pile was taken, False if the turn was skipped
    """
    player = _get_active_player(state, player_id)
    state.is_another_turn = False

    if is_eight_constraint_active(state, player_id):
        logger.info(f"[8-Constraint] Active for {player.name}. Skipping turn instead of taking pile.")
        advance_turn(state)
        return False

    top_card = state.pile.top
    if top_card is not None and top_card.rank == ABSORBED_RANK:
        state.discard.add(state.pile.pop_top())

    logger.info(f"[TakePile] Player {player.name} took the pile ({len(state.pile)} cards).")
    player.hand.extend(state.pile.take_all())
    state.last_played_card_rank = None

    refill_hand(player, state)
    advance_turn(state)
    return True


def check_playable(state: GameState, player_id: str) -> bool:
    """Tell whether the player has any legal move against the current pile."""
    player = state.get_player(player_id)
    if player is None:
        raise_error(INVALID_PLAYER, "Invalid player")
    return is_playable(player.hand, state.pile.top, state, player_id)
