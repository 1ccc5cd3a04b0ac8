"""
Game state dataclasses for tracking a Dots and Boxes match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum

from dotsboxes.game.errors import IllegalMove

_LINE_PATTERN = re.compile(r"^\s*([hvHV])\s*[:,]\s*(\d+)\s*[:,]\s*(\d+)\s*$")
_BOX_PATTERN = re.compile(r"^\s*(\d+)\s*[:,]\s*(\d+)\s*$")


class Orientation(str, Enum):
    """Direction of a line segment between two adjacent dots."""

    HORIZONTAL = "h"
    VERTICAL = "v"


@dataclass(frozen=True)
class LineId:
    """
    Identifies one line on the grid.

    Horizontal line (r, c) joins dots (r, c) and (r, c+1).
    Vertical line (r, c) joins dots (r, c) and (r+1, c).

    Attributes:
        orientation: Horizontal or vertical
        row: Row of the line's first dot
        col: Column of the line's first dot
    """

    orientation: Orientation
    row: int
    col: int

    def __post_init__(self) -> None:
        # Accept plain "h"/"v" strings; Orientation rejects anything else
        object.__setattr__(self, "orientation", Orientation(self.orientation))

    @classmethod
    def h(cls, row: int, col: int) -> LineId:
        return cls(Orientation.HORIZONTAL, row, col)

    @classmethod
    def v(cls, row: int, col: int) -> LineId:
        return cls(Orientation.VERTICAL, row, col)

    @classmethod
    def parse(cls, text: str | LineId) -> LineId:
        """
        Parse the canonical 'h:R:C' / 'v:R:C' form.

        Raises:
            IllegalMove: If the text is not a line id
        """
        if isinstance(text, LineId):
            return text
        match = _LINE_PATTERN.match(str(text))
        if not match:
            raise IllegalMove("malformed", text, f"Not a line id: {text!r}")
        orientation, row, col = match.groups()
        return cls(Orientation(orientation.lower()), int(row), int(col))

    @property
    def is_horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    def in_bounds(self, size: int) -> bool:
        """Whether this line exists on a grid with `size` boxes per side."""
        if self.is_horizontal:
            return 0 <= self.row <= size and 0 <= self.col < size
        return 0 <= self.row < size and 0 <= self.col <= size

    def __str__(self) -> str:
        return f"{self.orientation.value}:{self.row}:{self.col}"


@dataclass(frozen=True)
class BoxId:
    """Identifies the unit cell whose top-left dot is (row, col)."""

    row: int
    col: int

    @classmethod
    def parse(cls, text: str | BoxId) -> BoxId:
        if isinstance(text, BoxId):
            return text
        match = _BOX_PATTERN.match(str(text))
        if not match:
            raise ValueError(f"Not a box id: {text!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    def edges(self) -> tuple[LineId, LineId, LineId, LineId]:
        """The four bounding lines: top, bottom, left, right."""
        r, c = self.row, self.col
        return (LineId.h(r, c), LineId.h(r + 1, c), LineId.v(r, c), LineId.v(r, c + 1))

    def __str__(self) -> str:
        return f"{self.row}:{self.col}"


@dataclass
class Line:
    """A line and the id of the player who drew it (None while undrawn)."""

    id: LineId
    owner: str | None = None


@dataclass
class Box:
    """A box and the id of the player who completed it (None while open)."""

    id: BoxId
    owner: str | None = None


@dataclass
class Player:
    """
    A participant in a match.

    Attributes:
        id: Stable identifier, unique within the match
        name: Display name
        avatar: Display avatar (opaque to the engine)
        color: Display color token (opaque to the engine)
        score: Number of boxes owned
        is_ai: Whether moves for this player are computer-generated
        difficulty: AI tier for computer players ('easy', 'medium', 'hard')
    """

    id: str
    name: str
    avatar: str = ""
    color: str = ""
    score: int = 0
    is_ai: bool = False
    difficulty: str | None = None


@dataclass
class GameState:
    """
    Complete state of a match.

    Attributes:
        size: Boxes per side
        lines: Every line on the grid, keyed by id
        boxes: Every box on the grid, keyed by id
        players: Players in turn order
        active_player_index: Index of the player whose move is awaited
        is_game_over: True once every line is owned
        winner: Id of the unique top scorer (set at game over, None on a tie)
        is_tie: True when two or more players share the top score at game over
        history: Human-readable move log, for display only
    """

    size: int
    lines: dict[LineId, Line]
    boxes: dict[BoxId, Box]
    players: list[Player]
    active_player_index: int = 0
    is_game_over: bool = False
    winner: str | None = None
    is_tie: bool = False
    history: list[str] = field(default_factory=list)

    @property
    def active_player(self) -> Player:
        return self.players[self.active_player_index]

    @property
    def owned_line_count(self) -> int:
        return sum(1 for line in self.lines.values() if line.owner is not None)

    @property
    def owned_box_count(self) -> int:
        return sum(1 for box in self.boxes.values() if box.owner is not None)

    @property
    def scores(self) -> dict[str, int]:
        """Player id -> score, in turn order."""
        return {p.id: p.score for p in self.players}

    def open_lines(self) -> list[LineId]:
        """Ids of all lines nobody has drawn yet."""
        return [line_id for line_id, line in self.lines.items() if line.owner is None]

    def is_drawn(self, line_id: LineId) -> bool:
        line = self.lines.get(line_id)
        return line is not None and line.owner is not None

    def player(self, player_id: str) -> Player | None:
        """Look up a player by id."""
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def copy(self) -> GameState:
        """Independent copy; mutating it never affects this state."""
        return GameState(
            size=self.size,
            lines={k: replace(v) for k, v in self.lines.items()},
            boxes={k: replace(v) for k, v in self.boxes.items()},
            players=[replace(p) for p in self.players],
            active_player_index=self.active_player_index,
            is_game_over=self.is_game_over,
            winner=self.winner,
            is_tie=self.is_tie,
            history=list(self.history),
        )
