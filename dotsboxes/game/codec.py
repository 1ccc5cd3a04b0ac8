"""
Lossless serialization of GameState.

Encodes to a plain dict, which is then written as JSON (for the HTTP API and
saved matches) or msgpack (compact binary for storage).

Usage:
    from dotsboxes.game.codec import dumps, loads

    text = dumps(state)
    assert loads(text) == state
"""

from __future__ import annotations

import json
import logging
from typing import Any

import msgpack

from dotsboxes.game.errors import IllegalMove, InvalidConfiguration
from dotsboxes.game.rules import all_box_ids, all_line_ids, box_side_count, compute_winner
from dotsboxes.game.state import Box, BoxId, GameState, Line, LineId, Player

logger = logging.getLogger(__name__)

# Bump when the encoded shape changes
FORMAT_VERSION = 1

_PLAYER_FIELDS = ("id", "name", "avatar", "color", "score", "is_ai", "difficulty")
_STATE_FIELDS = (
    "version",
    "size",
    "lines",
    "boxes",
    "players",
    "active_player_index",
    "is_game_over",
    "winner",
    "is_tie",
    "history",
)


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Encode every field of a GameState into JSON-compatible types."""
    return {
        "version": FORMAT_VERSION,
        "size": state.size,
        "lines": {str(line_id): line.owner for line_id, line in state.lines.items()},
        "boxes": {str(box_id): box.owner for box_id, box in state.boxes.items()},
        "players": [{name: getattr(p, name) for name in _PLAYER_FIELDS} for p in state.players],
        "active_player_index": state.active_player_index,
        "is_game_over": state.is_game_over,
        "winner": state.winner,
        "is_tie": state.is_tie,
        "history": list(state.history),
    }


def state_from_dict(data: dict[str, Any]) -> GameState:
    """
    Decode and validate an encoded GameState.

    Raises:
        InvalidConfiguration: If the data is not a consistent encoded state
    """
    if not isinstance(data, dict):
        raise InvalidConfiguration(f"Encoded state must be an object, got {type(data).__name__}")

    missing = [name for name in _STATE_FIELDS if name not in data]
    if missing:
        raise InvalidConfiguration(f"Encoded state is missing fields: {', '.join(missing)}")
    if data["version"] != FORMAT_VERSION:
        raise InvalidConfiguration(f"Unsupported state version {data['version']!r}")

    size = data["size"]
    if isinstance(size, bool) or not isinstance(size, int) or size < 1:
        raise InvalidConfiguration(f"Invalid grid size {size!r}")

    index = data["active_player_index"]
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidConfiguration(f"Invalid active player index {index!r}")

    if not isinstance(data["players"], list):
        raise InvalidConfiguration("Encoded players must be a list")
    players = [_player_from_dict(p) for p in data["players"]]
    player_ids = {p.id for p in players}
    if len(player_ids) != len(players) or not players:
        raise InvalidConfiguration("Encoded players must be non-empty with distinct ids")

    def owner_of(value: Any, what: str) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str) or value not in player_ids:
            raise InvalidConfiguration(f"{what} owned by unknown player {value!r}")
        return value

    try:
        lines = {LineId.parse(k): v for k, v in data["lines"].items()}
        boxes = {BoxId.parse(k): v for k, v in data["boxes"].items()}
    except (IllegalMove, ValueError, AttributeError) as e:
        raise InvalidConfiguration(f"Malformed line or box id: {e}") from e

    if set(lines) != set(all_line_ids(size)):
        raise InvalidConfiguration(f"Line set does not match a {size}x{size} grid")
    if set(boxes) != set(all_box_ids(size)):
        raise InvalidConfiguration(f"Box set does not match a {size}x{size} grid")

    for name in ("is_game_over", "is_tie"):
        if not isinstance(data[name], bool):
            raise InvalidConfiguration(f"Field '{name}' must be a boolean, got {data[name]!r}")
    if data["winner"] is not None and not isinstance(data["winner"], str):
        raise InvalidConfiguration(f"Invalid winner {data['winner']!r}")
    history = data["history"]
    if not isinstance(history, list) or not all(isinstance(entry, str) for entry in history):
        raise InvalidConfiguration("History must be a list of strings")

    # Rebuild in canonical order so equal states compare and iterate alike
    state = GameState(
        size=size,
        lines={i: Line(i, owner_of(lines[i], f"Line {i}")) for i in all_line_ids(size)},
        boxes={i: Box(i, owner_of(boxes[i], f"Box {i}")) for i in all_box_ids(size)},
        players=players,
        active_player_index=data["active_player_index"],
        is_game_over=data["is_game_over"],
        winner=data["winner"],
        is_tie=data["is_tie"],
        history=list(history),
    )
    _check_consistency(state)
    return state


def _player_from_dict(data: Any) -> Player:
    if not isinstance(data, dict) or "id" not in data or "name" not in data:
        raise InvalidConfiguration(f"Malformed player entry: {data!r}")
    if not isinstance(data["id"], str) or not isinstance(data["name"], str):
        raise InvalidConfiguration(f"Player id and name must be strings: {data!r}")
    unknown = set(data) - set(_PLAYER_FIELDS)
    if unknown:
        raise InvalidConfiguration(f"Unknown player fields: {', '.join(sorted(unknown))}")
    return Player(**data)


def _check_consistency(state: GameState) -> None:
    """Reject states no sequence of legal moves could have produced."""
    if not 0 <= state.active_player_index < len(state.players):
        raise InvalidConfiguration(f"Active player index {state.active_player_index} out of range")

    for box_id, box in state.boxes.items():
        closed = box_side_count(state, box_id) == 4
        if closed != (box.owner is not None):
            raise InvalidConfiguration(f"Box {box_id} ownership disagrees with its lines")

    for p in state.players:
        owned = sum(1 for box in state.boxes.values() if box.owner == p.id)
        if owned != p.score:
            raise InvalidConfiguration(f"Score of '{p.id}' does not match owned boxes")

    all_drawn = state.owned_line_count == len(state.lines)
    if state.is_game_over != all_drawn:
        raise InvalidConfiguration("Game-over flag disagrees with drawn lines")
    if state.is_game_over:
        if (state.winner, state.is_tie) != compute_winner(state.players):
            raise InvalidConfiguration("Winner does not match the final scores")
    elif state.winner is not None or state.is_tie:
        raise InvalidConfiguration("Winner or tie set before game over")


def dumps(state: GameState) -> str:
    """Encode a GameState as JSON text."""
    return json.dumps(state_to_dict(state), ensure_ascii=False)


def loads(text: str | bytes) -> GameState:
    """Decode a GameState from JSON text."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidConfiguration(f"Invalid JSON: {e}") from e
    return state_from_dict(data)


def pack(state: GameState) -> bytes:
    """Encode a GameState as msgpack bytes."""
    return msgpack.packb(state_to_dict(state), use_bin_type=True)


def unpack(data: bytes) -> GameState:
    """Decode a GameState from msgpack bytes."""
    try:
        decoded = msgpack.unpackb(data, raw=False)
    except (msgpack.exceptions.UnpackException, ValueError) as e:
        raise InvalidConfiguration(f"Invalid msgpack data: {e}") from e
    logger.debug(f"Unpacked {len(data)} bytes")
    return state_from_dict(decoded)
