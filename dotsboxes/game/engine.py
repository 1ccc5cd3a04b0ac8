"""
Game engine for driving Dots and Boxes matches.

The rules live in dotsboxes.game.rules as pure functions; this module is the
single driver that owns the current state, serializes moves, consults agents
for computer players and notifies subscribers after every accepted move.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from dotsboxes.agents.base import AgentContext
from dotsboxes.game import rules
from dotsboxes.game.errors import AgentSelectionError
from dotsboxes.game.state import GameState, LineId, Player

if TYPE_CHECKING:
    from dotsboxes.agents.base import Agent

logger = logging.getLogger(__name__)

StateListener = Callable[[GameState], None]


class GameEngine:
    """
    Runs Dots and Boxes matches.

    The engine handles:
    - Creating and resetting the match state
    - Applying moves submitted by the presentation layer
    - Running the agent decision loop for computer players
    - Notifying subscribers of every new state
    """

    def __init__(
        self,
        agents: dict[str, Agent] | None = None,
        seed: int | None = None,
    ) -> None:
        """
        Initialize the game engine.

        Args:
            agents: Player id -> agent overrides. Players without an entry get
                a HumanAgent, or an AI agent at their difficulty if is_ai.
            seed: Random seed handed to default AI agents
        """
        self._overrides: dict[str, Agent] = dict(agents or {})
        self._agents: dict[str, Agent] = dict(self._overrides)
        self._seed = seed
        self._state: GameState | None = None
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> GameState:
        """Current match state."""
        if self._state is None:
            raise RuntimeError("No match in progress; call start() first")
        return self._state

    @property
    def started(self) -> bool:
        return self._state is not None

    def agent_for(self, player: Player) -> Agent:
        """Agent moving for a player (created on first use)."""
        if player.id not in self._agents:
            from dotsboxes.agents import agent_for_player

            self._agents[player.id] = agent_for_player(player, seed=self._seed)
        return self._agents[player.id]

    def subscribe(self, callback: StateListener) -> Callable[[], None]:
        """
        Register a callback invoked with the new state after every change.

        Returns:
            Function that removes the callback
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _publish(self, state: GameState) -> GameState:
        self._state = state
        for callback in list(self._listeners):
            callback(state)
        if state.is_game_over:
            for player in state.players:
                self.agent_for(player).on_game_end(state)
        return state

    def start(self, size: int, players: Sequence[Player]) -> GameState:
        """
        Start a new match, replacing any current one.

        Raises:
            InvalidConfiguration: If the size or roster is invalid
        """
        state = rules.initialize(size, players)
        # Rosters can change between matches; only overrides survive
        self._agents = dict(self._overrides)
        for player in state.players:
            self.agent_for(player).on_game_start(state)
        return self._publish(state)

    def reset(self) -> GameState:
        """Start over with the same grid size and roster."""
        current = self.state
        state = rules.reset_game(current.size, current.players)
        for player in state.players:
            self.agent_for(player).on_game_start(state)
        return self._publish(state)

    def submit(self, line_id: LineId | str, player_id: str | None = None) -> GameState:
        """
        Apply a move on behalf of the active player.

        Raises:
            IllegalMove: If the move is rejected (state is left unchanged)
        """
        return self._publish(rules.apply_move(self.state, line_id, player_id))

    def step(self) -> GameState:
        """
        Let the active player's agent choose and play one line.

        Raises:
            AgentSelectionError: If the agent returns no line or an illegal one
        """
        state = self.state
        if state.is_game_over:
            return state

        player = state.active_player
        agent = self.agent_for(player)
        legal = rules.legal_moves(state)
        if not legal:
            raise AgentSelectionError(
                "No legal lines remain but the game is not over"
            )

        context = AgentContext(
            state=state.copy(),
            player_id=player.id,
            legal_moves=legal,
            move_number=state.owned_line_count + 1,
        )

        decision_start = time.time() * 1000
        chosen = agent.choose_line(context)
        decision_time = time.time() * 1000 - decision_start

        if chosen is None or chosen not in set(legal):
            logger.error(f"Agent {agent.name} chose invalid line: {chosen!r}")
            raise AgentSelectionError(f"Agent {agent.name} chose invalid line: {chosen!r}")

        logger.debug(
            f"Move {context.move_number}: {player.name} ({agent.name}) -> {chosen} "
            f"in {decision_time:.1f}ms"
        )
        return self.submit(chosen, player.id)

    def play_ai_turns(self) -> GameState:
        """Play moves while the active player is computer-controlled."""
        state = self.state
        while not state.is_game_over and state.active_player.is_ai:
            state = self.step()
        return state

    def run(self, max_moves: int | None = None) -> GameState:
        """
        Play the match to the end, every player moving through its agent.

        Args:
            max_moves: Stop early after this many moves (None = no limit)

        Returns:
            The final (or latest) state
        """
        state = self.state
        logger.info(
            f"Running {state.size}x{state.size} match: "
            f"{' vs '.join(p.name for p in state.players)}"
        )
        moves = 0
        while not state.is_game_over:
            if max_moves is not None and moves >= max_moves:
                break
            state = self.step()
            moves += 1
        return state
