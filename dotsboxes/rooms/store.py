"""
In-memory room store for hosting online matches.

A room collects players under a short join code, then starts a match. Only
the active player's moves are relayed to the engine; computer players fill
empty seats and move as soon as it is their turn. Subscribers are called
with the room after every change instead of polling for it.

Usage:
    from dotsboxes.rooms import RoomStore

    store = RoomStore()
    room = store.create_room(2, 5, "Alice", "🧑‍🚀")
    store.join_room(room.code, "Bob", "👽")
    store.start_game(room.code)
"""

from __future__ import annotations

import logging
import random
import threading
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from dotsboxes.config import (
    AI_AVATARS,
    AI_NAMES,
    DEFAULT_AVATAR,
    DEFAULT_DIFFICULTY,
    PLAYER_COLORS,
    ROOM_CODE_ALPHABET,
    ROOM_CODE_LENGTH,
    ROOM_SIZES,
    SUPPORTED_GRID_SIZES,
)
from dotsboxes.game.codec import state_to_dict
from dotsboxes.game.engine import GameEngine
from dotsboxes.game.errors import IllegalMove, InvalidConfiguration, RoomClosed, RoomNotFound
from dotsboxes.game.state import GameState, LineId, Player

logger = logging.getLogger(__name__)

RoomListener = Callable[["Room"], None]


@dataclass
class RoomPlayer:
    """
    A person seated in a room.

    Attributes:
        id: Player id, reused as the match player id
        name: Display name (unique within the room)
        avatar: Display avatar
        joined_at: Epoch seconds when the player joined
    """

    id: str
    name: str
    avatar: str
    joined_at: float


@dataclass
class Room:
    """
    A lobby and, once started, its match.

    Attributes:
        id: Unique room id
        code: Short join code shared with other players
        max_players: Seats in the room (2 or 4)
        grid_size: Boxes per side for the match
        players: Seated people in join order
        started: Whether the match has begun
        started_at: Epoch seconds when the match began
        created_at: Epoch seconds when the room was created
        game: Current match state once started
    """

    id: str
    code: str
    max_players: int
    grid_size: int
    players: list[RoomPlayer] = field(default_factory=list)
    started: bool = False
    started_at: float | None = None
    created_at: float = field(default_factory=time.time)
    game: GameState | None = None

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players


def room_to_dict(room: Room) -> dict[str, Any]:
    """Encode a room for the JSON API."""
    return {
        "id": room.id,
        "code": room.code,
        "maxPlayers": room.max_players,
        "gridSize": room.grid_size,
        "players": [
            {"id": p.id, "name": p.name, "avatar": p.avatar, "joinedAt": p.joined_at}
            for p in room.players
        ],
        "started": room.started,
        "startedAt": room.started_at,
        "createdAt": room.created_at,
        "game": state_to_dict(room.game) if room.game is not None else None,
    }


def normalize_code(code: str) -> str:
    return str(code).strip().upper()


def _validate_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidConfiguration("Player name required")
    return name.strip()


class RoomStore:
    """
    Keyed in-memory store of rooms.

    One lock guards every mutation, so at most one move per store is in
    flight at a time.
    """

    def __init__(self, seed: int | None = None) -> None:
        """
        Initialize the store.

        Args:
            seed: Random seed for join codes and computer players
        """
        self._rooms: dict[str, Room] = {}
        self._engines: dict[str, GameEngine] = {}
        self._listeners: dict[str, list[RoomListener]] = {}
        self._lock = threading.RLock()
        self._seed = seed
        self._rng = random.Random(seed)

    def _generate_code(self) -> str:
        while True:
            code = "".join(
                self._rng.choice(ROOM_CODE_ALPHABET) for _ in range(ROOM_CODE_LENGTH)
            )
            if code not in self._rooms:
                return code

    @staticmethod
    def _new_player(name: str, avatar: str | None) -> RoomPlayer:
        return RoomPlayer(
            id=f"player_{uuid.uuid4().hex[:12]}",
            name=name,
            avatar=avatar or DEFAULT_AVATAR,
            joined_at=time.time(),
        )

    def _get(self, code: str) -> Room:
        room = self._rooms.get(normalize_code(code))
        if room is None:
            raise RoomNotFound(f"Room '{code}' not found")
        return room

    def _notify(self, room: Room) -> None:
        for callback in list(self._listeners.get(room.code, [])):
            callback(room)

    def create_room(
        self,
        max_players: int,
        grid_size: int,
        player_name: str,
        player_avatar: str | None = None,
    ) -> Room:
        """
        Create a room with its host seated.

        Raises:
            InvalidConfiguration: If the capacity, grid size or name is invalid
        """
        if max_players not in ROOM_SIZES or isinstance(max_players, bool):
            raise InvalidConfiguration(f"Rooms hold {' or '.join(map(str, ROOM_SIZES))} players")
        if grid_size not in SUPPORTED_GRID_SIZES or isinstance(grid_size, bool):
            raise InvalidConfiguration(
                f"Grid size must be one of {', '.join(map(str, SUPPORTED_GRID_SIZES))}"
            )
        name = _validate_name(player_name)

        with self._lock:
            room = Room(
                id=uuid.uuid4().hex,
                code=self._generate_code(),
                max_players=max_players,
                grid_size=grid_size,
                players=[self._new_player(name, player_avatar)],
            )
            self._rooms[room.code] = room
            logger.info(f"Created room {room.code} ({max_players} seats, {grid_size}x{grid_size})")
            return room

    def get_room(self, code: str) -> Room:
        """
        Raises:
            RoomNotFound: If no room has this code
        """
        with self._lock:
            return self._get(code)

    def join_room(self, code: str, player_name: str, player_avatar: str | None = None) -> Room:
        """
        Seat a player in a room. Joining again under the same name is a no-op.

        Raises:
            RoomNotFound: If no room has this code
            RoomClosed: If the room has started or is full
        """
        name = _validate_name(player_name)
        with self._lock:
            room = self._get(code)
            if room.started:
                raise RoomClosed(f"Room {room.code} has already started")
            if any(p.name == name for p in room.players):
                return room
            if room.is_full:
                raise RoomClosed(f"Room {room.code} is full")

            room.players.append(self._new_player(name, player_avatar))
            logger.info(f"{name} joined room {room.code} ({len(room.players)}/{room.max_players})")
            self._notify(room)
            return room

    def start_game(self, code: str) -> Room:
        """
        Start the match, filling empty seats with computer players.

        Starting an already started room returns it unchanged.

        Raises:
            RoomNotFound: If no room has this code
        """
        with self._lock:
            room = self._get(code)
            if room.started:
                return room

            players = [
                Player(id=p.id, name=p.name, avatar=p.avatar, color=PLAYER_COLORS[i])
                for i, p in enumerate(room.players)
            ]
            for seat in range(len(players), room.max_players):
                bot = seat - len(room.players)
                players.append(
                    Player(
                        id=f"ai_{bot + 1}",
                        name=AI_NAMES[bot % len(AI_NAMES)],
                        avatar=AI_AVATARS[bot % len(AI_AVATARS)],
                        color=PLAYER_COLORS[seat],
                        is_ai=True,
                        difficulty=DEFAULT_DIFFICULTY,
                    )
                )

            engine = GameEngine(seed=self._seed)
            engine.start(room.grid_size, players)
            room.game = engine.play_ai_turns()
            room.started = True
            room.started_at = time.time()
            self._engines[room.code] = engine

            logger.info(f"Started room {room.code} with {len(players)} players")
            self._notify(room)
            return room

    def submit_move(self, code: str, player_id: str, line: LineId | str) -> Room:
        """
        Relay a move from a seated player, then let computer players respond.

        Raises:
            RoomNotFound: If no room has this code
            IllegalMove: If the match has not started, it is not this player's
                turn, or the line cannot be drawn
        """
        with self._lock:
            room = self._get(code)
            engine = self._engines.get(room.code)
            if not room.started or engine is None:
                raise IllegalMove("not_started", line, f"Room {room.code} has not started")

            try:
                engine.submit(line, player_id)
            except IllegalMove as e:
                logger.warning(f"Rejected move in room {room.code} from '{player_id}': {e}")
                raise
            room.game = engine.play_ai_turns()
            self._notify(room)
            return room

    def subscribe(self, code: str, callback: RoomListener) -> Callable[[], None]:
        """
        Call `callback(room)` after every change to a room.

        Returns:
            Function that removes the callback

        Raises:
            RoomNotFound: If no room has this code
        """
        with self._lock:
            room = self._get(code)
            listeners = self._listeners.setdefault(room.code, [])
            listeners.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in listeners:
                    listeners.remove(callback)

        return unsubscribe

    def __len__(self) -> int:
        return len(self._rooms)
