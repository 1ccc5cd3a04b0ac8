"""
Configuration constants for the Dots and Boxes project.

All grid, player, AI and server settings are defined here.
Tunables are loaded from environment variables (or a .env file) - never hardcode secrets.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env if present
load_dotenv()

# =============================================================================
# Path Configuration
# =============================================================================

# Project root is parent of dotsboxes/
PROJECT_ROOT = Path(__file__).parent.parent

# Saved matches (written by scripts/play.py --save)
SAVES_DIR = PROJECT_ROOT / "saves"

# =============================================================================
# Grid Configuration
# =============================================================================

# Grid sizes offered to players (boxes per side). The engine accepts any N >= 1.
SUPPORTED_GRID_SIZES = (3, 5, 7, 10)

DEFAULT_GRID_SIZE = int(os.environ.get("DOTSBOXES_GRID_SIZE", "5"))

# =============================================================================
# Player Configuration
# =============================================================================

MIN_PLAYERS = 2
MAX_PLAYERS = 4

# Room capacities a host may choose
ROOM_SIZES = (2, 4)

DEFAULT_AVATAR = "👤"

# Display colors, assigned by seat order
PLAYER_COLORS = ("--player-1", "--player-2", "--player-3", "--player-4")

# Names and avatars for computer players filling empty seats
AI_NAMES = ("Sarah", "Mike", "Alex", "Bot")
AI_AVATARS = ("👩‍🎤", "🧛", "🧙", "🤖")

# =============================================================================
# AI Configuration
# =============================================================================

DIFFICULTIES = ("easy", "medium", "hard")

DEFAULT_DIFFICULTY = os.environ.get("DOTSBOXES_DIFFICULTY", "medium")

# Maximum number of simulated moves per decision, by difficulty.
# Keeps a 10x10 decision well under a second.
AI_SEARCH_BUDGET = {
    "easy": 0,
    "medium": 0,
    "hard": int(os.environ.get("DOTSBOXES_HARD_BUDGET", "4000")),
}

# =============================================================================
# Room / Server Configuration
# =============================================================================

ROOM_CODE_LENGTH = 6
ROOM_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"

SERVER_HOST = os.environ.get("DOTSBOXES_HOST", "127.0.0.1")
SERVER_PORT = int(os.environ.get("DOTSBOXES_PORT", "5000"))

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# =============================================================================
# Validation Helpers
# =============================================================================

def difficulty_budget(difficulty: str) -> int:
    """Return the search budget for a difficulty level."""
    if difficulty not in AI_SEARCH_BUDGET:
        available = ", ".join(DIFFICULTIES)
        raise ValueError(f"Unknown difficulty '{difficulty}'. Available: {available}")
    return AI_SEARCH_BUDGET[difficulty]
