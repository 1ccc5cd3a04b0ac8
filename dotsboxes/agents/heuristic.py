"""
Rule-based computer opponents, one per difficulty level.

- GreedyAgent (easy): take a box whenever possible, otherwise random
- SafeAgent (medium): take boxes, then avoid handing any box to the opponent
- ChainAgent (hard): like SafeAgent, but when every line gives something
  away, simulate the opponent's capture run and sacrifice the fewest boxes
"""

from __future__ import annotations

import logging
import random

from dotsboxes.agents.base import Agent, AgentContext
from dotsboxes.config import difficulty_budget
from dotsboxes.game.errors import AgentSelectionError
from dotsboxes.game.rules import adjacent_boxes, box_side_count, boxes_completed_by
from dotsboxes.game.state import GameState, LineId

logger = logging.getLogger(__name__)


def third_sides_created(state: GameState, line_id: LineId) -> int:
    """
    How many adjacent boxes would become exactly 3-sided after drawing the line.

    Completing a box (3 -> 4) is fine; only new 3-siders are counted.
    """
    return sum(
        1
        for box_id in adjacent_boxes(line_id, state.size)
        if box_side_count(state, box_id) == 2
    )


def is_safe(state: GameState, line_id: LineId) -> bool:
    """True if the line does not leave a box for the next player."""
    return third_sides_created(state, line_id) == 0


class GreedyAgent(Agent):
    """
    Takes the line completing the most boxes; otherwise plays randomly.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return "easy"

    @property
    def description(self) -> str:
        return "Greedy: completes boxes when possible, otherwise random"

    def _require_moves(self, context: AgentContext) -> list[LineId]:
        if not context.legal_moves:
            raise AgentSelectionError(
                f"{self.name} agent found no legal line for '{context.player_id}'"
            )
        return context.legal_moves

    def _best_captures(self, context: AgentContext) -> list[LineId]:
        """Lines completing the most boxes (empty if none completes any)."""
        scored = [(boxes_completed_by(context.state, m), m) for m in context.legal_moves]
        best = max(count for count, _ in scored)
        if best == 0:
            return []
        return [m for count, m in scored if count == best]

    def choose_line(self, context: AgentContext) -> LineId:
        moves = self._require_moves(context)
        captures = self._best_captures(context)
        if captures:
            return self._rng.choice(captures)
        return self._rng.choice(moves)


class SafeAgent(GreedyAgent):
    """
    Capture-first, never-three policy.

    1) If any line completes boxes, choose one completing the most.
    2) Else choose uniformly among safe lines (no new 3-sided boxes).
    3) Else choose among lines creating the fewest 3-sided boxes.
    """

    @property
    def name(self) -> str:
        return "medium"

    @property
    def description(self) -> str:
        return "Captures boxes and avoids giving any away while it can"

    def _least_damaging(self, context: AgentContext) -> list[LineId]:
        scored = [(third_sides_created(context.state, m), m) for m in context.legal_moves]
        fewest = min(count for count, _ in scored)
        return [m for count, m in scored if count == fewest]

    def choose_line(self, context: AgentContext) -> LineId:
        self._require_moves(context)

        captures = self._best_captures(context)
        if captures:
            return self._rng.choice(captures)

        safe = [m for m in context.legal_moves if is_safe(context.state, m)]
        if safe:
            return self._rng.choice(safe)

        return self._forced_move(context)

    def _forced_move(self, context: AgentContext) -> LineId:
        return self._rng.choice(self._least_damaging(context))


class ChainAgent(SafeAgent):
    """
    SafeAgent that counts the cost of forced sacrifices.

    When no safe line is left, each candidate is scored by simulating the
    opponent greedily capturing everything it opens up; the candidate giving
    away the fewest boxes is played. Simulation stops once `budget` line
    draws have been simulated, keeping the best candidate found so far.
    """

    def __init__(self, seed: int | None = None, budget: int | None = None) -> None:
        super().__init__(seed)
        self._budget = difficulty_budget("hard") if budget is None else budget

    @property
    def name(self) -> str:
        return "hard"

    @property
    def description(self) -> str:
        return "Never-three play, sacrificing the shortest chain when forced"

    def _forced_move(self, context: AgentContext) -> LineId:
        state = context.state
        drawn = {line_id for line_id, line in state.lines.items() if line.owner is not None}

        candidates = list(context.legal_moves)
        self._rng.shuffle(candidates)

        spent = 0
        best_cost = None
        best: list[LineId] = []
        for line_id in candidates:
            if spent >= self._budget:
                logger.debug(f"Search budget of {self._budget} exhausted")
                break
            cost, steps = self._boxes_given_away(drawn, line_id, state.size)
            spent += steps + 1
            if best_cost is None or cost < best_cost:
                best_cost, best = cost, [line_id]
            elif cost == best_cost:
                best.append(line_id)

        if not best:
            return super()._forced_move(context)

        logger.debug(f"Sacrificing {best_cost} box(es) after {spent} simulated draws")
        return self._rng.choice(best)

    @staticmethod
    def _boxes_given_away(
        drawn: set[LineId], line_id: LineId, size: int
    ) -> tuple[int, int]:
        """
        Simulate drawing a line, then the opponent taking every box it can.

        Returns:
            (boxes captured by the opponent, simulated capture draws)
        """
        drawn = set(drawn)
        drawn.add(line_id)
        frontier = adjacent_boxes(line_id, size)
        taken = 0
        steps = 0

        while frontier:
            box_id = frontier.pop()
            missing = [edge for edge in box_id.edges() if edge not in drawn]
            if len(missing) != 1:
                continue
            edge = missing[0]
            drawn.add(edge)
            steps += 1
            for neighbor in adjacent_boxes(edge, size):
                if all(e in drawn for e in neighbor.edges()):
                    taken += 1
                else:
                    frontier.append(neighbor)

        return taken, steps
