"""
Game sessions: one game per id, its live connections and its turn timer.

Every change to a session's game goes through the session lock, timer expiry
included, and the resulting snapshot is broadcast before the lock is released.
"""

import asyncio
import logging
import random
import threading
import uuid
from typing import Any, Dict, List, Optional, Set

from .constants import (
    GAME_ID_ALPHABET, GAME_ID_RETRIES, STATUS_FINISHED, STATUS_PLAYING,
    STATUS_WAITING
)
from .engine import check_playable, play_cards, start_game, take_pile
from .errors import (
    GAME_ALREADY_STARTED, GAME_FULL, GAME_ID_TAKEN, GAME_NOT_FOUND,
    GAME_NOT_STARTED, INTERNAL_ERROR, NOT_ENOUGH_PLAYERS, NOT_YOUR_TURN,
    PLAYER_NOT_IN_GAME, GameError, raise_error
)
from .models import GameState, LobbyPlayer
from .rules import RuleConfig, default_rules
from .serialization import get_lobby_summary, serialize_lobby_player, serialize_state
from .ws.events import (
    ConnectedEvent, PlayerJoinedEvent, TurnTimerExpiredEvent,
    create_state_update_event, create_timer_update_event
)

logger = logging.getLogger(__name__)


def generate_game_id(length: int = 6, rng: Optional[random.Random] = None) -> str:
    """Create a short, human-friendly game id."""
    source = rng or random
    return "".join(source.choice(GAME_ID_ALPHABET) for _ in range(length))


class Session:
    """
    A single game and everyone connected to it.

    Connections are any object with an async ``send(message: dict)``.
    """

    def __init__(self, game_id: str, lobby_players: List[LobbyPlayer], rules: RuleConfig):
        self.game_id = game_id
        self.lobby_players = lobby_players
        self.rules = rules
        self.status = STATUS_WAITING
        self.connections: Set[Any] = set()
        self.game_state: Optional[GameState] = None
        self.turn_deadline: Optional[float] = None
        self.turn_number = 0
        self._lock = asyncio.Lock()
        self._countdown_task: Optional[asyncio.Task] = None
        self._heartbeat_task: Optional[asyncio.Task] = None

    def has_player(self, player_id: str) -> bool:
        return any(player.id == player_id for player in self.lobby_players)

    # Lobby

    async def add_lobby_player(self, name: str) -> LobbyPlayer:
        async with self._lock:
            if self.status != STATUS_WAITING:
                raise_error(GAME_ALREADY_STARTED, "Game already started")
            if len(self.lobby_players) >= self.rules.max_players:
                raise_error(GAME_FULL, f"Game is full (max {self.rules.max_players} players)")

            player = LobbyPlayer(id=str(uuid.uuid4()), name=name)
            self.lobby_players.append(player)
            logger.info(f"Player {name} ({player.id}) joined game {self.game_id}")
            await self.broadcast(PlayerJoinedEvent(player=serialize_lobby_player(player)).to_message())
            return player

    async def start(self, seed: Optional[int] = None) -> Dict[str, Any]:
        async with self._lock:
            if self.status != STATUS_WAITING:
                raise_error(GAME_ALREADY_STARTED, "Game already started")
            if not self.rules.validate_player_count(len(self.lobby_players)):
                raise_error(
                    NOT_ENOUGH_PLAYERS,
                    f"Need at least {self.rules.min_players} players to start"
                )

            self.game_state = start_game(self.lobby_players, seed)
            self.status = STATUS_PLAYING
            logger.info(f"Game {self.game_id} started with {len(self.lobby_players)} players")
            self._after_mutation()
            snapshot = serialize_state(self.game_state)
            await self.broadcast(create_state_update_event(self.game_id, snapshot).to_message())
            return snapshot

    # Connections

    async def connect(self, connection: Any, player_id: str) -> None:
        """Register a connection and send it the latest snapshot."""
        async with self._lock:
            if not self.has_player(player_id):
                raise_error(PLAYER_NOT_IN_GAME, "Player not in game")

            self.connections.add(connection)
            logger.info(f"Player {player_id} connected to game {self.game_id}")
            await connection.send(ConnectedEvent(game_id=self.game_id, player_id=player_id).to_message())
            if self.game_state is not None:
                snapshot = serialize_state(self.game_state)
                await connection.send(create_state_update_event(self.game_id, snapshot).to_message())

    def disconnect(self, connection: Any) -> None:
        self.connections.discard(connection)

    async def broadcast(self, message: Dict[str, Any]) -> None:
        """Send a message to every connection, dropping the ones that fail."""
        for connection in list(self.connections):
            try:
                await connection.send(message)
            except Exception as e:
                logger.error(f"Error broadcasting to game {self.game_id}: {e}")
                self.connections.discard(connection)

    # Play

    def _require_turn(self, player_id: str) -> GameState:
        if self.status == STATUS_FINISHED:
            raise_error(GAME_NOT_STARTED, "Game is already over")
        if self.status != STATUS_PLAYING or self.game_state is None:
            raise_error(GAME_NOT_STARTED, "Game not started")
        if self.game_state.current_player.id != player_id:
            raise_error(NOT_YOUR_TURN, "Not your turn")
        return self.game_state

    async def play(self, player_id: str, card_ids: List[str]) -> bool:
        async with self._lock:
            state = self._require_turn(player_id)
            if not play_cards(state, player_id, card_ids):
                return False
            self._after_mutation()
            await self._broadcast_state()
            return True

    async def take_pile(self, player_id: str) -> None:
        async with self._lock:
            state = self._require_turn(player_id)
            take_pile(state, player_id)
            self._after_mutation()
            await self._broadcast_state()

    async def check_playable(self, player_id: str) -> bool:
        async with self._lock:
            if self.game_state is None:
                raise_error(GAME_NOT_STARTED, "Game not started")
            return check_playable(self.game_state, player_id)

    async def snapshot(self) -> Dict[str, Any]:
        async with self._lock:
            if self.game_state is None:
                return get_lobby_summary(self.game_id, self.status, self.lobby_players)
            return {
                "gameId": self.game_id,
                "status": self.status,
                "state": serialize_state(self.game_state),
            }

    def _after_mutation(self) -> None:
        self.turn_number += 1
        if self.game_state.status == STATUS_FINISHED:
            self.status = STATUS_FINISHED
            self.cancel_timer()
            logger.info(f"Game {self.game_id} finished, winner {self.game_state.winner_id}")
        else:
            self.restart_timer()

    async def _broadcast_state(self) -> None:
        snapshot = serialize_state(self.game_state)
        await self.broadcast(create_state_update_event(self.game_id, snapshot).to_message())

    # Turn timer

    def restart_timer(self) -> None:
        """Replace any running countdown and heartbeat with fresh ones for the current player."""
        self.cancel_timer()
        state = self.game_state
        if state is None or state.status != STATUS_PLAYING:
            return

        loop = asyncio.get_running_loop()
        self.turn_deadline = loop.time() + self.rules.turn_timeout
        player_id = state.current_player.id
        self._countdown_task = loop.create_task(self._countdown(self.turn_number))
        self._heartbeat_task = loop.create_task(self._heartbeat(player_id, self.turn_deadline))

    def cancel_timer(self) -> None:
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None

        for task in (self._countdown_task, self._heartbeat_task):
            # Expiry restarts the timer from inside its own countdown task
            if task is not None and task is not current and not task.done():
                task.cancel()
        self._countdown_task = None
        self._heartbeat_task = None
        self.turn_deadline = None

    async def _countdown(self, turn_number: int) -> None:
        await asyncio.sleep(self.rules.turn_timeout)
        try:
            await self.expire_turn(turn_number)
        except GameError as e:
            logger.error(f"Turn expiry failed for game {self.game_id}: {e}")

    async def _heartbeat(self, player_id: str, deadline: float) -> None:
        loop = asyncio.get_running_loop()
        while True:
            await asyncio.sleep(self.rules.heartbeat_interval)
            remaining = max(0.0, deadline - loop.time())
            await self.broadcast(create_timer_update_event(player_id, int(remaining * 1000)).to_message())
            if remaining <= 0:
                return

    async def expire_turn(self, turn_number: int) -> bool:
        """
        Force the current player to take the pile if the turn has not moved on.

        Args:
            turn_number: The turn the countdown was armed for

        Returns:
            True if the turn was forfeited
        """
        async with self._lock:
            state = self.game_state
            if state is None or state.status != STATUS_PLAYING or turn_number != self.turn_number:
                return False

            player = state.current_player
            logger.info(f"Turn timer expired for player {player.id} in game {self.game_id}")
            take_pile(state, player.id)
            await self.broadcast(TurnTimerExpiredEvent(player_id=player.id).to_message())
            self._after_mutation()
            await self._broadcast_state()
            return True


class SessionRegistry:
    """Process-wide mapping of game ids to sessions."""

    def __init__(self, rules: RuleConfig = default_rules):
        self.rules = rules
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def connection_count(self) -> int:
        with self._lock:
            sessions = list(self._sessions.values())
        return sum(len(session.connections) for session in sessions)

    def create_session(self, player_names: Optional[List[str]] = None, game_id: Optional[str] = None) -> Session:
        names = player_names or []
        if len(names) > self.rules.max_players:
            raise_error(GAME_FULL, f"Game is full (max {self.rules.max_players} players)")
        players = [LobbyPlayer(id=str(uuid.uuid4()), name=name) for name in names]

        with self._lock:
            if game_id is not None:
                if game_id in self._sessions:
                    raise_error(GAME_ID_TAKEN, "Game ID already exists")
            else:
                for _ in range(GAME_ID_RETRIES):
                    game_id = generate_game_id(self.rules.game_id_length)
                    if game_id not in self._sessions:
                        break
                else:
                    raise_error(INTERNAL_ERROR, "Failed to generate unique Game ID")

            session = Session(game_id, players, self.rules)
            self._sessions[game_id] = session

        logger.info(f"Created game {game_id} with {len(players)} players")
        return session

    def get(self, game_id: str) -> Session:
        with self._lock:
            session = self._sessions.get(game_id)
        if session is None:
            raise_error(GAME_NOT_FOUND, "Game not found")
        return session

    async def join_session(self, game_id: str, name: str) -> LobbyPlayer:
        return await self.get(game_id).add_lobby_player(name)

    async def start_session(self, game_id: str, seed: Optional[int] = None) -> Dict[str, Any]:
        return await self.get(game_id).start(seed)

    async def get_snapshot(self, game_id: str) -> Dict[str, Any]:
        return await self.get(game_id).snapshot()

    async def apply_play(self, game_id: str, player_id: str, card_ids: List[str]) -> bool:
        return await self.get(game_id).play(player_id, card_ids)

    async def apply_take_pile(self, game_id: str, player_id: str) -> None:
        await self.get(game_id).take_pile(player_id)

    async def check_playable(self, game_id: str, player_id: str) -> bool:
        return await self.get(game_id).check_playable(player_id)

    async def connect(self, game_id: str, player_id: str, connection: Any) -> Session:
        session = self.get(game_id)
        await session.connect(connection, player_id)
        return session

    def disconnect(self, game_id: str, connection: Any) -> None:
        with self._lock:
            session = self._sessions.get(game_id)
        if session is not None:
            session.disconnect(connection)

    async def shutdown(self) -> None:
        """Stop every running turn timer."""
        with self._lock:
            sessions = list(self._sessions.values())
        for session in sessions:
            session.cancel_timer()
