"""
Random agent baseline - draws lines uniformly at random.
"""

from __future__ import annotations

import random

from dotsboxes.agents.base import Agent, AgentContext
from dotsboxes.game.errors import AgentSelectionError
from dotsboxes.game.state import LineId


class RandomAgent(Agent):
    """
    Baseline agent that picks a random legal line on each turn.

    Used to establish a lower bound on performance.
    """

    def __init__(self, seed: int | None = None) -> None:
        """
        Initialize the random agent.

        Args:
            seed: Random seed for reproducibility
        """
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "random"

    @property
    def description(self) -> str:
        return "Uniformly random line selection"

    def choose_line(self, context: AgentContext) -> LineId:
        """Pick a random line from available options."""
        if not context.legal_moves:
            raise AgentSelectionError("No legal lines to choose from")
        return self._rng.choice(context.legal_moves)
