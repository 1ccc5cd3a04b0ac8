"""
Human agent that prompts for user input on stdin.
"""

from __future__ import annotations

from dotsboxes.agents.base import Agent, AgentContext
from dotsboxes.game.errors import IllegalMove
from dotsboxes.game.state import LineId


class HumanAgent(Agent):
    """
    Human-controlled agent that prompts for line selection.

    Accepts 'h:R:C' / 'v:R:C' (commas also work) and re-prompts until the
    line is legal. Typing 'q' quits the match.
    """

    def __init__(self, prompt: str = "> ") -> None:
        self._prompt = prompt

    @property
    def name(self) -> str:
        return "human"

    @property
    def description(self) -> str:
        return "Human player - type the line to draw"

    @property
    def is_human(self) -> bool:
        return True

    def choose_line(self, context: AgentContext) -> LineId:
        """Prompt the human to choose a line."""
        player = context.state.player(context.player_id)
        name = player.name if player else context.player_id
        print(f"\n{name}, your move ({len(context.legal_moves)} lines left).")
        print("Enter a line as h:ROW:COL or v:ROW:COL (or 'q' to quit):")

        legal = set(context.legal_moves)
        while True:
            try:
                choice = input(self._prompt).strip()
            except EOFError:
                raise KeyboardInterrupt("User quit")

            if choice.lower() == "q":
                raise KeyboardInterrupt("User quit")

            try:
                line_id = LineId.parse(choice)
            except IllegalMove:
                print("Not a line. Example: h:0:1")
                continue

            if line_id not in legal:
                print(f"{line_id} cannot be drawn. Try again.")
                continue

            return line_id
