"""Game models and data structures"""

import uuid
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

from .constants import STATUS_WAITING


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))


class CardZone:
    """Ordered container of cards; the last card is the top.

    Cards only ever move between zones through these methods, so a card
    leaves one zone exactly when it arrives in another.
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards: List[Card] = list(cards) if cards else []

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    def __bool__(self) -> bool:
        return bool(self._cards)

    def __repr__(self) -> str:
        return f"CardZone({[c.rank for c in self._cards]})"

    @property
    def cards(self) -> List[Card]:
        return list(self._cards)

    @property
    def top(self) -> Optional[Card]:
        return self._cards[-1] if self._cards else None

    def ids(self) -> List[str]:
        return [c.id for c in self._cards]

    def find(self, card_id: str) -> Optional[Card]:
        for card in self._cards:
            if card.id == card_id:
                return card
        return None

    def add(self, card: Card) -> None:
        self._cards.append(card)

    def extend(self, cards: Iterable[Card]) -> None:
        self._cards.extend(cards)

    def draw(self, count: int = 1) -> List[Card]:
        """Remove up to ``count`` cards from the head of the zone."""
        drawn = self._cards[:count]
        del self._cards[:count]
        return drawn

    def pop_top(self) -> Optional[Card]:
        return self._cards.pop() if self._cards else None

    def remove_ids(self, card_ids: List[str]) -> List[Card]:
        """Remove the given cards, returned in the order requested.

        Raises KeyError if any id is missing and ValueError if an id repeats;
        nothing is removed then.
        """
        wanted = set(card_ids)
        if len(wanted) != len(card_ids):
            raise ValueError(f"Duplicate card ids: {card_ids}")
        by_id = {c.id: c for c in self._cards}
        missing = [cid for cid in card_ids if cid not in by_id]
        if missing:
            raise KeyError(missing[0])
        self._cards = [c for c in self._cards if c.id not in wanted]
        return [by_id[cid] for cid in card_ids]

    def take_all(self) -> List[Card]:
        taken, self._cards = self._cards, []
        return taken


@dataclass
class Player:
    id: str
    name: str
    hand: CardZone = field(default_factory=CardZone)
    face_up: CardZone = field(default_factory=CardZone)
    face_down: CardZone = field(default_factory=CardZone)
    is_out: bool = False

    def has_no_cards(self) -> bool:
        return not self.hand and not self.face_up and not self.face_down


@dataclass
class LobbyPlayer:
    id: str
    name: str


@dataclass
class GameState:
    players: List[Player] = field(default_factory=list)
    deck: CardZone = field(default_factory=CardZone)
    pile: CardZone = field(default_factory=CardZone)
    discard: CardZone = field(default_factory=CardZone)  # burned piles and absorbed 3s
    current_player_index: int = 0
    last_played_player_id: Optional[str] = None
    last_played_card_rank: Optional[str] = None
    status: str = STATUS_WAITING  # waiting|playing|finished
    winner_id: Optional[str] = None
    is_another_turn: bool = False

    @property
    def current_player(self) -> Player:
        return self.players[self.current_player_index]

    def get_player(self, player_id: str) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def seat_of(self, player_id: str) -> int:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index
        return -1

    def zones(self) -> List[CardZone]:
        zones = [self.deck, self.pile, self.discard]
        for player in self.players:
            zones.extend([player.hand, player.face_up, player.face_down])
        return zones

    def all_card_ids(self) -> List[str]:
        return [card_id for zone in self.zones() for card_id in zone.ids()]
