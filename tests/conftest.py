"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from dotsboxes.game import GameState, Player, apply_move, initialize
from dotsboxes.rooms import RoomStore


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def two_players() -> list[Player]:
    """Return two human players, Alice moving first."""
    return [
        Player(id="a", name="Alice", avatar="🧑‍🚀", color="--player-1"),
        Player(id="b", name="Bob", avatar="👽", color="--player-2"),
    ]


@pytest.fixture
def three_players(two_players: list[Player]) -> list[Player]:
    """Return three players, the last one a computer."""
    return two_players + [
        Player(id="c", name="Sarah", avatar="👩‍🎤", color="--player-3", is_ai=True, difficulty="easy"),
    ]


@pytest.fixture
def ai_players() -> list[Player]:
    """Return two computer players."""
    return [
        Player(id="x", name="Xavier", is_ai=True, difficulty="medium"),
        Player(id="y", name="Yara", is_ai=True, difficulty="hard"),
    ]


@pytest.fixture
def play() -> Callable[..., GameState]:
    """Return a helper applying a sequence of 'h:R:C' / 'v:R:C' moves."""

    def _play(state: GameState, *lines: str) -> GameState:
        for line in lines:
            state = apply_move(state, line)
        return state

    return _play


@pytest.fixture
def small_game(two_players: list[Player]) -> GameState:
    """Return a fresh 2x2 game between Alice and Bob."""
    return initialize(2, two_players)


@pytest.fixture
def store() -> RoomStore:
    """Return an empty, seeded room store."""
    return RoomStore(seed=1234)
