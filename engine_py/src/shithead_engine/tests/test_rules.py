"""
Tests for move legality and burn detection.
"""

import pytest

from shithead_engine.comparator import compare_ranks, count_top_run, get_rank_value
from shithead_engine.models import CardZone
from shithead_engine.validate import (
    is_after_five, is_eight_constraint_active, is_playable, is_valid_move,
    should_burn_pile
)
from .conftest import make_cards


def legal(state, ranks, after_five=False):
    return is_valid_move(make_cards(ranks), state.pile.top, state, after_five)


def test_rank_comparison():
    assert get_rank_value('2') == 2
    assert get_rank_value('JOKER') == 15
    assert compare_ranks('A', 'K') > 0
    assert compare_ranks('10', '9') > 0
    assert compare_ranks('4', '4') == 0
    with pytest.raises(ValueError):
        get_rank_value('1')


def test_empty_pile(make_state):
    state = make_state([["4"], ["5"]])
    assert legal(state, ["K"])
    assert legal(state, ["4", "4", "4", "4"])
    assert not legal(state, ["4", "4"])
    assert not legal(state, ["4", "4", "4"])
    assert legal(state, ["4", "4"], after_five=True)


def test_mixed_ranks_rejected(make_state):
    state = make_state([["4"], ["5"]], pile=["3"])
    assert not legal(state, ["4", "5"])
    assert not legal(state, [])
    assert not legal(state, ["4", "5"], after_five=True)


def test_after_five_window(make_state):
    state = make_state([["4"], ["5"]], pile=["K", "5"], last_played_player_id="p1")
    assert is_after_five(state, "p1")
    assert not is_after_five(state, "p2")
    assert legal(state, ["4"], after_five=True)
    assert legal(state, ["9", "9", "9"], after_five=True)


def test_three_on_top_accepts_only_joker(make_state):
    state = make_state([["4"], ["5"]], pile=["K", "3"])
    assert legal(state, ["JOKER"])
    assert not legal(state, ["A"])
    assert not legal(state, ["2"])
    assert not legal(state, ["10"])


def test_seven_on_top(make_state):
    state = make_state([["4"], ["5"]], pile=["7"])
    for rank in ["2", "3", "4", "5", "6", "7", "JOKER"]:
        assert legal(state, [rank]), rank
    for rank in ["8", "10", "J", "A"]:
        assert not legal(state, [rank]), rank


def test_eight_constraint(make_state):
    # p1 just played the 8 and p2 sits right after p1
    state = make_state([["4"], ["4", "4"], ["9"]], pile=["8"], current=1, last_played_player_id="p1")
    assert is_eight_constraint_active(state)
    assert is_eight_constraint_active(state, "p2")
    assert not is_eight_constraint_active(state, "p3")

    assert legal(state, ["8"])
    assert legal(state, ["9"])
    for rank in ["2", "5", "10", "JOKER", "A", "4"]:
        assert not legal(state, [rank]), rank

    assert not is_playable(state.players[1].hand, state.pile.top, state, "p2")


def test_eight_without_constraint(make_state):
    """[8, 8] on the pile played two seats back leaves the plain rank rules."""
    state = make_state(
        [["4"], ["4", "4"], ["9"]], pile=["8", "8"], current=2, last_played_player_id="p1"
    )
    assert not is_eight_constraint_active(state)
    assert not legal(state, ["4"])
    assert not legal(state, ["4", "4"])
    for rank in ["8", "9", "2", "3", "5", "10", "JOKER"]:
        assert legal(state, [rank]), rank


def test_wild_ranks_on_high_card(make_state):
    state = make_state([["4"], ["5"]], pile=["A"])
    for rank in ["2", "3", "5", "10", "JOKER"]:
        assert legal(state, [rank]), rank
    assert not legal(state, ["4"])
    assert not legal(state, ["K"])
    assert legal(state, ["A"])


def test_joker_on_pile_accepts_anything(make_state):
    state = make_state([["4"], ["5"]], pile=["JOKER"])
    assert legal(state, ["4"])
    assert legal(state, ["K"])


def test_at_least_top_rank(make_state):
    state = make_state([["4"], ["5"]], pile=["4", "9", "4"])
    assert legal(state, ["4"])
    assert legal(state, ["Q"])

    state = make_state([["4"], ["5"]], pile=["9"])
    assert legal(state, ["9"])
    assert not legal(state, ["6"])


def test_multi_card_burn_completion(make_state):
    state = make_state([["6", "6", "6"], ["5"]], pile=["9", "6"])
    assert count_top_run(state.pile) == 1
    assert legal(state, ["6", "6", "6"])
    assert not legal(state, ["6", "6"])
    assert not legal(state, ["7", "7", "7"])

    state = make_state([["Q", "Q"], ["5"]], pile=["Q", "Q"])
    assert legal(state, ["Q", "Q"])
    assert not legal(state, ["Q", "Q", "Q"])


def test_should_burn_pile():
    assert should_burn_pile(CardZone(make_cards(["2", "6", "6", "6", "6"])))
    assert not should_burn_pile(CardZone(make_cards(["6", "6", "6"])))
    assert not should_burn_pile(CardZone(make_cards(["4", "9", "4", "4"])))
    assert not should_burn_pile(CardZone())


def test_is_playable(make_state):
    state = make_state([["4", "6"], ["5"]])
    assert is_playable(state.players[0].hand, None, state, "p1")

    state = make_state([["4", "6"], ["JOKER"]], pile=["3"])
    assert not is_playable(state.players[0].hand, state.pile.top, state, "p1")
    assert is_playable(state.players[1].hand, state.pile.top, state, "p2")

    state = make_state([["4", "6"], ["5"]], pile=["K"])
    assert not is_playable(state.players[0].hand, state.pile.top, state, "p1")

    state = make_state([[], ["5"]], pile=["4"])
    assert not is_playable(state.players[0].hand, state.pile.top, state, "p1")


def test_is_playable_counts_burn_completion(make_state):
    # A single 3 may not go on a 3 but two more complete the run of four
    state = make_state([["3", "3", "K"], ["5"]], pile=["6", "3", "3"])
    assert is_playable(state.players[0].hand, state.pile.top, state, "p1")

    state = make_state([["3", "K"], ["5"]], pile=["6", "3", "3"])
    assert not is_playable(state.players[0].hand, state.pile.top, state, "p1")


def test_is_playable_after_five(make_state):
    state = make_state([["4"], ["6"]], pile=["5"], last_played_player_id="p1")
    assert is_playable(state.players[0].hand, state.pile.top, state, "p1")


def test_is_playable_under_eight_constraint(make_state):
    state = make_state([["4"], ["9", "K"]], pile=["8"], current=1, last_played_player_id="p1")
    assert is_playable(state.players[1].hand, state.pile.top, state, "p2")
