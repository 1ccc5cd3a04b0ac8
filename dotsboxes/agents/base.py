"""
Agent base class and protocol for computer and human players.

All agents must implement choose_line() to decide which line to draw next.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotsboxes.game.state import GameState, LineId


@dataclass
class AgentContext:
    """
    Context passed to agents for decision making.

    Attributes:
        state: Current game state (agents must not mutate it)
        player_id: Id of the player the agent is moving for
        legal_moves: Lines that may be drawn now
        move_number: 1-indexed number of the move being chosen
    """

    state: GameState
    player_id: str
    legal_moves: list[LineId]
    move_number: int


class Agent(ABC):
    """
    Abstract base class for Dots and Boxes agents.

    Agents receive the current game state and must choose which line to draw.
    Any agent must return a line from context.legal_moves, always return one
    when the list is non-empty, and return in bounded time.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier for the agent (e.g., 'random', 'hard', 'human')."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the agent's strategy."""
        ...

    @property
    def is_human(self) -> bool:
        """Whether this agent relays a person's choices (e.g., HumanAgent)."""
        return False

    @abstractmethod
    def choose_line(self, context: AgentContext) -> LineId:
        """
        Choose which line to draw next.

        Args:
            context: Current game context with legal moves

        Returns:
            The line to draw. Must be in context.legal_moves.

        Raises:
            AgentSelectionError: If no legal line is available
        """
        ...

    def on_game_start(self, state: GameState) -> None:
        """Called when a new game begins. Override for setup."""
        pass

    def on_game_end(self, state: GameState) -> None:
        """Called when game ends. Override for cleanup/learning."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
