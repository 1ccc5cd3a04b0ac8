"""
Unit tests for the Dots and Boxes rules engine.
"""

import random

import pytest

from dotsboxes.game import (
    BoxId,
    IllegalMove,
    InvalidConfiguration,
    LineId,
    Orientation,
    Player,
    apply_move,
    initialize,
    legal_moves,
    reset_game,
)
from dotsboxes.game.rules import adjacent_boxes, box_side_count, compute_winner


class TestInitialize:
    """Test creating a fresh match."""

    @pytest.mark.parametrize("size", [1, 2, 3, 5, 7, 10])
    def test_line_and_box_counts(self, size, two_players):
        """Should create 2N(N+1) lines and N^2 boxes."""
        state = initialize(size, two_players)
        assert len(state.lines) == 2 * size * (size + 1)
        assert len(state.boxes) == size * size

    def test_everything_unowned(self, small_game):
        """No line or box should have an owner."""
        assert all(line.owner is None for line in small_game.lines.values())
        assert all(box.owner is None for box in small_game.boxes.values())

    def test_initial_flags(self, small_game):
        """First player to move, game not over, empty history."""
        assert small_game.active_player_index == 0
        assert small_game.is_game_over is False
        assert small_game.winner is None
        assert small_game.is_tie is False
        assert small_game.history == []

    def test_scores_reset(self, two_players):
        """Incoming scores should be ignored."""
        two_players[0].score = 9
        state = initialize(3, two_players)
        assert state.scores == {"a": 0, "b": 0}
        assert two_players[0].score == 9  # caller's object untouched

    @pytest.mark.parametrize("size", [0, -1, 2.5, "3", True])
    def test_invalid_size(self, size, two_players):
        """Should reject sizes that are not positive integers."""
        with pytest.raises(InvalidConfiguration):
            initialize(size, two_players)

    def test_too_few_players(self, two_players):
        with pytest.raises(InvalidConfiguration):
            initialize(3, two_players[:1])

    def test_too_many_players(self):
        players = [Player(id=str(i), name=f"P{i}") for i in range(5)]
        with pytest.raises(InvalidConfiguration):
            initialize(3, players)

    def test_duplicate_ids(self):
        players = [Player(id="same", name="One"), Player(id="same", name="Two")]
        with pytest.raises(InvalidConfiguration):
            initialize(3, players)

    def test_invalid_configuration_is_value_error(self, two_players):
        """Callers catching ValueError should see configuration errors."""
        with pytest.raises(ValueError):
            initialize(0, two_players)

    def test_reset_game_is_fresh(self, small_game, two_players, play):
        """reset_game should discard progress."""
        played = play(small_game, "h:0:0", "h:1:0")
        fresh = reset_game(2, two_players)
        assert fresh.owned_line_count == 0
        assert fresh.history == []
        assert played.owned_line_count == 2


class TestGeometry:
    """Test line, box and adjacency helpers."""

    def test_box_edges(self):
        top, bottom, left, right = BoxId(1, 2).edges()
        assert top == LineId.h(1, 2)
        assert bottom == LineId.h(2, 2)
        assert left == LineId.v(1, 2)
        assert right == LineId.v(1, 3)

    def test_interior_line_borders_two_boxes(self):
        assert set(adjacent_boxes(LineId.h(1, 0), 2)) == {BoxId(0, 0), BoxId(1, 0)}
        assert set(adjacent_boxes(LineId.v(0, 1), 2)) == {BoxId(0, 0), BoxId(0, 1)}

    def test_edge_line_borders_one_box(self):
        assert adjacent_boxes(LineId.h(0, 1), 2) == [BoxId(0, 1)]
        assert adjacent_boxes(LineId.h(2, 1), 2) == [BoxId(1, 1)]
        assert adjacent_boxes(LineId.v(1, 0), 2) == [BoxId(1, 0)]
        assert adjacent_boxes(LineId.v(1, 2), 2) == [BoxId(1, 1)]

    def test_plain_string_orientation(self, small_game):
        line = LineId("h", 0, 0)
        assert line.orientation is Orientation.HORIZONTAL
        assert line == LineId.h(0, 0)
        assert str(line) == "h:0:0"
        assert adjacent_boxes(line, 2) == [BoxId(0, 0)]

        state = apply_move(small_game, line)
        assert state.lines[LineId.h(0, 0)].owner == "a"
        assert state.history[-1] == "Alice drew h:0:0"

    def test_unknown_orientation_rejected(self):
        with pytest.raises(ValueError):
            LineId("d", 0, 0)

    @pytest.mark.parametrize(
        "line,size,expected",
        [
            (LineId.h(0, 0), 1, True),
            (LineId.h(1, 0), 1, True),
            (LineId.h(2, 0), 1, False),
            (LineId.h(0, 1), 1, False),
            (LineId.v(0, 1), 1, True),
            (LineId.v(1, 0), 1, False),
            (LineId.v(-1, 0), 3, False),
        ],
    )
    def test_in_bounds(self, line, size, expected):
        assert line.in_bounds(size) is expected

    def test_parse_and_format(self):
        """String form should round-trip and accept loose input."""
        assert str(LineId.h(3, 4)) == "h:3:4"
        assert LineId.parse("v:0:2") == LineId.v(0, 2)
        assert LineId.parse(" H, 1, 2 ") == LineId.h(1, 2)

    @pytest.mark.parametrize("text", ["", "x:0:0", "h:0", "h:a:b", "h:-1:0"])
    def test_parse_malformed(self, text):
        with pytest.raises(IllegalMove) as exc:
            LineId.parse(text)
        assert exc.value.reason == "malformed"


class TestSingleBoxScenario:
    """The 1x1 game: four lines, one box."""

    def test_fourth_line_wins(self, two_players):
        """Turns alternate until the fourth line closes the box."""
        state = initialize(1, two_players)

        state = apply_move(state, "h:0:0")
        assert state.active_player.id == "b"
        state = apply_move(state, "v:0:0")
        assert state.active_player.id == "a"
        state = apply_move(state, "h:1:0")
        assert state.active_player.id == "b"
        assert state.boxes[BoxId(0, 0)].owner is None

        state = apply_move(state, "v:0:1")
        assert state.boxes[BoxId(0, 0)].owner == "b"
        assert state.player("b").score == 1
        assert state.player("a").score == 0
        assert state.is_game_over is True
        assert state.winner == "b"
        assert state.is_tie is False

    def test_history(self, two_players, play):
        state = play(initialize(1, two_players), "h:0:0", "v:0:0", "h:1:0", "v:0:1")
        assert state.history[0] == "Alice drew h:0:0"
        assert state.history[3] == "Bob drew v:0:1 and completed box 0:0"
        assert state.history[-1] == "Game over: Bob wins with 1 box"


class TestTurnRotation:
    """Test extra turns and wrap-around."""

    def test_no_box_advances_turn(self, small_game):
        state = apply_move(small_game, "h:0:0")
        assert state.active_player_index == 1

    def test_wraps_past_last_player(self, three_players, play):
        state = play(initialize(3, three_players), "h:0:0", "h:0:1", "h:0:2")
        assert state.active_player_index == 0

    def test_completing_box_keeps_turn(self, small_game, play):
        # Alice, Bob, Alice draw three sides of box 0:0; Bob closes it
        state = play(small_game, "h:0:0", "h:1:0", "v:0:0")
        assert state.active_player.id == "b"
        state = apply_move(state, "v:0:1")
        assert state.boxes[BoxId(0, 0)].owner == "b"
        assert state.active_player.id == "b"

    def test_double_cross(self, small_game, play):
        """Closing two boxes at once scores 2 and grants one extra turn."""
        state = play(small_game, "h:0:0", "h:1:0", "v:0:0", "h:0:1", "h:1:1", "v:0:2")
        assert state.owned_box_count == 0
        mover = state.active_player
        before = mover.score

        state = apply_move(state, "v:0:1")
        assert state.player(mover.id).score == before + 2
        assert state.boxes[BoxId(0, 0)].owner == mover.id
        assert state.boxes[BoxId(0, 1)].owner == mover.id
        assert state.active_player.id == mover.id
        assert "completed boxes" in state.history[-1]

        # The extra turn is used up by a move that closes nothing
        state = apply_move(state, "h:2:0")
        assert state.active_player.id != mover.id

    def test_last_move_double_cross_ends_game(self, two_players, play):
        """A double box on the final line ends the game despite the extra turn."""
        state = initialize(2, two_players)
        all_but_last = [str(line) for line in state.open_lines() if str(line) != "h:1:0"]
        state = play(state, *all_but_last)
        assert not state.is_game_over
        assert legal_moves(state) == [LineId.h(1, 0)]

        state = apply_move(state, "h:1:0")
        assert state.is_game_over
        assert legal_moves(state) == []


class TestIllegalMoves:
    """Test rejected moves leave state untouched."""

    def test_owned_line(self, small_game):
        state = apply_move(small_game, "h:0:0")
        snapshot = state.copy()
        with pytest.raises(IllegalMove) as exc:
            apply_move(state, "h:0:0")
        assert exc.value.reason == "owned"
        assert state == snapshot

    @pytest.mark.parametrize("line", ["h:3:0", "h:0:2", "v:2:0", "v:0:3"])
    def test_out_of_bounds(self, small_game, line):
        snapshot = small_game.copy()
        with pytest.raises(IllegalMove) as exc:
            apply_move(small_game, line)
        assert exc.value.reason == "out_of_bounds"
        assert small_game == snapshot

    def test_after_game_over(self, two_players, play):
        state = play(initialize(1, two_players), "h:0:0", "v:0:0", "h:1:0", "v:0:1")
        with pytest.raises(IllegalMove) as exc:
            apply_move(state, "h:0:0")
        assert exc.value.reason == "game_over"
        assert state.is_game_over

    def test_wrong_player(self, small_game):
        with pytest.raises(IllegalMove) as exc:
            apply_move(small_game, "h:0:0", player_id="b")
        assert exc.value.reason == "not_your_turn"
        assert small_game.owned_line_count == 0

    def test_right_player(self, small_game):
        state = apply_move(small_game, LineId.h(0, 0), player_id="a")
        assert state.lines[LineId.h(0, 0)].owner == "a"

    def test_input_state_not_mutated(self, small_game):
        """Accepted moves return a new state."""
        apply_move(small_game, "h:0:0")
        assert small_game.owned_line_count == 0
        assert small_game.history == []


class TestWinner:
    """Test outcome computation."""

    def test_unique_winner(self):
        players = [Player("a", "A", score=3), Player("b", "B", score=1)]
        assert compute_winner(players) == ("a", False)

    def test_tie(self):
        players = [Player("a", "A", score=2), Player("b", "B", score=2), Player("c", "C", score=0)]
        assert compute_winner(players) == (None, True)

    def test_winner_only_at_game_over(self, small_game, play):
        state = play(small_game, "h:0:0", "h:1:0", "v:0:0", "v:0:1")
        assert state.player("b").score == 1
        assert state.winner is None
        assert state.is_tie is False


class TestRandomPlayouts:
    """Invariants checked after every move of random matches."""

    @pytest.mark.parametrize("seed", range(12))
    def test_invariants(self, seed):
        rng = random.Random(seed)
        size = rng.randint(1, 4)
        players = [Player(id=f"p{i}", name=f"P{i}") for i in range(rng.randint(2, 4))]
        state = initialize(size, players)
        total_lines = len(state.lines)

        for moves in range(1, total_lines + 1):
            assert not state.is_game_over
            previous = state
            line = rng.choice(legal_moves(state))
            state = apply_move(state, line)

            # Ownership never changes once set
            for line_id, old in previous.lines.items():
                if old.owner is not None:
                    assert state.lines[line_id].owner == old.owner
            assert state.lines[line].owner == previous.active_player.id

            # Boxes are owned iff closed; scores match owned boxes
            for box_id, box in state.boxes.items():
                assert (box.owner is not None) == (box_side_count(state, box_id) == 4)
            assert sum(p.score for p in state.players) == state.owned_box_count

            # Extra turn iff something was completed
            gained = state.owned_box_count - previous.owned_box_count
            if gained:
                assert state.active_player_index == previous.active_player_index
            else:
                expected = (previous.active_player_index + 1) % len(players)
                assert state.active_player_index == expected

            assert state.is_game_over == (moves == total_lines)

        best = max(p.score for p in state.players)
        leaders = [p.id for p in state.players if p.score == best]
        if len(leaders) == 1:
            assert state.winner == leaders[0] and not state.is_tie
        else:
            assert state.winner is None and state.is_tie
