"""
Dots and Boxes rules engine.

Pure functions over GameState. A move never mutates the state it is given:
apply_move() returns a new state with exactly one more line drawn plus the
resulting box, score, turn and game-over updates.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from dotsboxes.config import MAX_PLAYERS, MIN_PLAYERS
from dotsboxes.game.errors import IllegalMove, InvalidConfiguration
from dotsboxes.game.state import Box, BoxId, GameState, Line, LineId, Player

logger = logging.getLogger(__name__)


# =============================================================================
# Grid geometry
# =============================================================================

def all_line_ids(size: int) -> list[LineId]:
    """Every line on the grid: horizontal rows first, then vertical."""
    horizontal = [LineId.h(r, c) for r in range(size + 1) for c in range(size)]
    vertical = [LineId.v(r, c) for r in range(size) for c in range(size + 1)]
    return horizontal + vertical


def all_box_ids(size: int) -> list[BoxId]:
    return [BoxId(r, c) for r in range(size) for c in range(size)]


def adjacent_boxes(line_id: LineId, size: int) -> list[BoxId]:
    """
    Boxes bordered by a line: two for interior lines, one on the outer edge.
    """
    r, c = line_id.row, line_id.col
    boxes = []
    if line_id.is_horizontal:
        if r < size:
            boxes.append(BoxId(r, c))  # below
        if r > 0:
            boxes.append(BoxId(r - 1, c))  # above
    else:
        if c < size:
            boxes.append(BoxId(r, c))  # right
        if c > 0:
            boxes.append(BoxId(r, c - 1))  # left
    return boxes


def box_side_count(state: GameState, box_id: BoxId) -> int:
    """Number of drawn sides of a box (0-4)."""
    return sum(1 for edge in box_id.edges() if state.lines[edge].owner is not None)


def boxes_completed_by(state: GameState, line_id: LineId) -> int:
    """How many boxes drawing this (undrawn) line would complete."""
    return sum(
        1
        for box_id in adjacent_boxes(line_id, state.size)
        if box_side_count(state, box_id) == 3
    )


def legal_moves(state: GameState) -> list[LineId]:
    """Lines that may be drawn now. Empty once the game is over."""
    if state.is_game_over:
        return []
    return state.open_lines()


def compute_winner(players: Sequence[Player]) -> tuple[str | None, bool]:
    """
    Determine the outcome from final scores.

    Returns:
        (winner_id, is_tie). winner_id is None when the top score is shared.
    """
    best = max(p.score for p in players)
    leaders = [p for p in players if p.score == best]
    if len(leaders) == 1:
        return leaders[0].id, False
    return None, True


# =============================================================================
# Match lifecycle
# =============================================================================

def _validate_config(size: int, players: Sequence[Player]) -> None:
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidConfiguration(f"Grid size must be an integer, got {size!r}")
    if size < 1:
        raise InvalidConfiguration(f"Grid size must be at least 1, got {size}")

    if not MIN_PLAYERS <= len(players) <= MAX_PLAYERS:
        raise InvalidConfiguration(
            f"A match needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(players)}"
        )

    seen = set()
    for p in players:
        if not isinstance(p, Player):
            raise InvalidConfiguration(f"Expected a Player, got {p!r}")
        if not p.id:
            raise InvalidConfiguration("Player id must not be empty")
        if p.id in seen:
            raise InvalidConfiguration(f"Duplicate player id '{p.id}'")
        seen.add(p.id)


def initialize(size: int, players: Sequence[Player]) -> GameState:
    """
    Create a fresh match.

    Args:
        size: Boxes per side (any N >= 1)
        players: 2-4 players with distinct ids, in turn order

    Returns:
        GameState with every line and box unowned and player 0 to move

    Raises:
        InvalidConfiguration: If the size or roster is invalid
    """
    players = list(players)
    _validate_config(size, players)

    state = GameState(
        size=size,
        lines={line_id: Line(line_id) for line_id in all_line_ids(size)},
        boxes={box_id: Box(box_id) for box_id in all_box_ids(size)},
        players=[replace(p, score=0) for p in players],
    )
    logger.info(
        f"New {size}x{size} match: {', '.join(p.name for p in state.players)}"
    )
    return state


def reset_game(size: int, players: Sequence[Player]) -> GameState:
    """Discard the current match and start over. Same as initialize()."""
    return initialize(size, players)


def apply_move(
    state: GameState,
    line_id: LineId | str,
    player_id: str | None = None,
) -> GameState:
    """
    Draw a line for the active player.

    Args:
        state: Current state (left unchanged)
        line_id: Line to draw, as a LineId or 'h:R:C' / 'v:R:C'
        player_id: If given, must be the active player's id

    Returns:
        New GameState reflecting the move

    Raises:
        IllegalMove: If the game is over, the line is out of bounds or
            already drawn, or player_id is not the active player
    """
    line_id = LineId.parse(line_id)

    if state.is_game_over:
        raise IllegalMove("game_over", line_id, "The game is already over")
    if not line_id.in_bounds(state.size):
        raise IllegalMove(
            "out_of_bounds", line_id,
            f"Line {line_id} is outside the {state.size}x{state.size} grid",
        )
    if state.lines[line_id].owner is not None:
        raise IllegalMove("owned", line_id, f"Line {line_id} is already drawn")
    if player_id is not None and player_id != state.active_player.id:
        raise IllegalMove(
            "not_your_turn", line_id,
            f"It is {state.active_player.name}'s turn, not '{player_id}'",
        )

    new = state.copy()
    mover = new.active_player

    # 1. Draw the line
    new.lines[line_id].owner = mover.id

    # 2. Award any boxes this line closed
    completed = []
    for box_id in adjacent_boxes(line_id, new.size):
        box = new.boxes[box_id]
        if box.owner is None and box_side_count(new, box_id) == 4:
            box.owner = mover.id
            mover.score += 1
            completed.append(box_id)

    # 3. Completing a box earns another move
    if not completed:
        new.active_player_index = (new.active_player_index + 1) % len(new.players)

    # 4. Terminal check
    if new.owned_line_count == len(new.lines):
        new.is_game_over = True
        new.winner, new.is_tie = compute_winner(new.players)

    # 5. History
    entry = f"{mover.name} drew {line_id}"
    if completed:
        noun = "box" if len(completed) == 1 else "boxes"
        entry += f" and completed {noun} {', '.join(str(b) for b in completed)}"
    new.history.append(entry)

    logger.debug(
        f"{entry} (score {mover.score}, next: {new.active_player.name})"
    )

    if new.is_game_over:
        new.history.append(describe_result(new))
        logger.info(new.history[-1])

    return new


def _boxes(count: int) -> str:
    return f"{count} box" if count == 1 else f"{count} boxes"


def describe_result(state: GameState) -> str:
    """One-line summary of a finished match."""
    if not state.is_game_over:
        return "Game in progress"
    if state.is_tie:
        best = max(p.score for p in state.players)
        return f"Game over: tie at {_boxes(best)}"
    winner = state.player(state.winner)
    return f"Game over: {winner.name} wins with {_boxes(winner.score)}"
