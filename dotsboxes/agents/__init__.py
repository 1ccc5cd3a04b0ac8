"""
Agents module.

Provides agents for choosing lines:
- HumanAgent: Human player via stdin
- RandomAgent: Random baseline
- GreedyAgent: Completes boxes when it can ('easy')
- SafeAgent: Never hands over a box while it can avoid it ('medium')
- ChainAgent: Minimizes forced sacrifices with a bounded search ('hard')
"""

from __future__ import annotations

from dotsboxes.agents.base import Agent, AgentContext
from dotsboxes.agents.heuristic import ChainAgent, GreedyAgent, SafeAgent
from dotsboxes.agents.human import HumanAgent
from dotsboxes.agents.random_agent import RandomAgent
from dotsboxes.config import DEFAULT_DIFFICULTY
from dotsboxes.game.state import Player

__all__ = [
    "Agent",
    "AgentContext",
    "HumanAgent",
    "RandomAgent",
    "GreedyAgent",
    "SafeAgent",
    "ChainAgent",
    "agent_for_player",
    "get_agent",
]


def get_agent(name: str, **kwargs) -> Agent:
    """
    Get an agent by name.

    Args:
        name: Agent identifier (human, random, easy, medium, hard, greedy, safe, chain)
        **kwargs: Additional arguments passed to agent constructor (e.g., seed, budget)

    Returns:
        Instantiated agent

    Raises:
        ValueError: If agent name is unknown
    """
    agents = {
        "human": HumanAgent,
        "random": RandomAgent,
        "easy": GreedyAgent,
        "greedy": GreedyAgent,
        "medium": SafeAgent,
        "safe": SafeAgent,
        "hard": ChainAgent,
        "chain": ChainAgent,
    }

    if name not in agents:
        available = ", ".join(agents.keys())
        raise ValueError(f"Unknown agent '{name}'. Available: {available}")

    # Only the hard agent takes a search budget
    if name not in ("hard", "chain"):
        kwargs.pop("budget", None)
    if name == "human":
        kwargs.pop("seed", None)

    return agents[name](**kwargs)


def agent_for_player(player: Player, seed: int | None = None) -> Agent:
    """Pick the agent that moves for a player: human, or AI at its difficulty."""
    if not player.is_ai:
        return HumanAgent()
    return get_agent(player.difficulty or DEFAULT_DIFFICULTY, seed=seed)
