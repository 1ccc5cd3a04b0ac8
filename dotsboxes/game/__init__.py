"""
Game engine module.

Provides the rules, state and serialization for Dots and Boxes:
- GameState: Complete match state
- initialize / apply_move / reset_game: The rules state machine
- GameEngine: Drives matches with agents
- dumps / loads / pack / unpack: Lossless state encoding
"""

from dotsboxes.game.codec import dumps, loads, pack, state_from_dict, state_to_dict, unpack
from dotsboxes.game.engine import GameEngine
from dotsboxes.game.errors import (
    AgentSelectionError,
    DotsBoxesError,
    IllegalMove,
    InvalidConfiguration,
)
from dotsboxes.game.rules import apply_move, initialize, legal_moves, reset_game
from dotsboxes.game.state import Box, BoxId, GameState, Line, LineId, Orientation, Player

__all__ = [
    "GameEngine",
    "GameState",
    "Line",
    "LineId",
    "Box",
    "BoxId",
    "Orientation",
    "Player",
    "initialize",
    "apply_move",
    "reset_game",
    "legal_moves",
    "state_to_dict",
    "state_from_dict",
    "dumps",
    "loads",
    "pack",
    "unpack",
    "DotsBoxesError",
    "InvalidConfiguration",
    "IllegalMove",
    "AgentSelectionError",
]
