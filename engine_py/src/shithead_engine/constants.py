"""Game constants and utilities"""

from typing import Dict

RANKS = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A']
JOKER = 'JOKER'
SUITS = ['♠', '♥', '♦', '♣']
JOKER_SUIT = '🃏'
JOKER_COUNT = 2

RANK_VALUES: Dict[str, int] = {
    '2': 2, '3': 3, '4': 4, '5': 5, '6': 6, '7': 7, '8': 8, '9': 9, '10': 10,
    'J': 11, 'Q': 12, 'K': 13, 'A': 14, JOKER: 15,
}

# Ranks that may be played on anything the pile top does not restrict
WILD_RANKS = {'2', '3', '5', '10', JOKER}

REPLAY_RANK = '5'
BURN_RANK = '10'
ABSORBED_RANK = '3'
SEVEN_RANK = '7'
EIGHT_RANK = '8'
EIGHT_ESCAPE_RANKS = {'8', '9'}
BURN_RUN_LENGTH = 4

CARDS_PER_ZONE = 3
HAND_SIZE = 3
DECK_SIZE = len(RANKS) * len(SUITS) + JOKER_COUNT

# Game status
STATUS_WAITING = 'waiting'
STATUS_PLAYING = 'playing'
STATUS_FINISHED = 'finished'

# Effects
EFFECT_REPLAY = 'replay'
EFFECT_TEN_BURN = 'ten_burn'
EFFECT_FOUR_BURN = 'four_of_a_kind_burn'

# Short game ids avoid I, O, 1 and 0
GAME_ID_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'
GAME_ID_RETRIES = 5
