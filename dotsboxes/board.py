"""
Plain-text rendering of a match for the terminal.
"""

from __future__ import annotations

from dotsboxes.game.state import BoxId, GameState, LineId


def render_board(state: GameState) -> str:
    """
    Draw the grid with row/column labels.

    Drawn lines show as '---' and '|', completed boxes show the first letter
    of their owner's name.
    """
    initials = {p.id: (p.name[:1] or "?").upper() for p in state.players}
    rows = ["    " + "".join(f"{c:<4}" for c in range(state.size + 1)).rstrip()]

    for r in range(state.size + 1):
        dots = []
        for c in range(state.size):
            drawn = state.is_drawn(LineId.h(r, c))
            dots.append("o" + ("---" if drawn else "   "))
        rows.append(f"{r:>2}  " + "".join(dots) + "o")

        if r == state.size:
            break

        cells = []
        for c in range(state.size + 1):
            cells.append("|" if state.is_drawn(LineId.v(r, c)) else " ")
            if c < state.size:
                owner = state.boxes[BoxId(r, c)].owner
                cells.append(f" {initials[owner]} " if owner else "   ")
        rows.append("    " + "".join(cells))

    return "\n".join(rows)


def render_scores(state: GameState) -> str:
    """One line per player, marking whose turn it is."""
    lines = []
    for i, p in enumerate(state.players):
        marker = ">" if i == state.active_player_index and not state.is_game_over else " "
        kind = f" [{p.difficulty or 'ai'}]" if p.is_ai else ""
        lines.append(f" {marker} {p.name}{kind}: {p.score}")
    return "\n".join(lines)
