"""
Tests for terminal rendering.
"""

from dotsboxes.board import render_board, render_scores


def test_empty_board(two_players):
    from dotsboxes.game import initialize

    text = render_board(initialize(1, two_players))
    assert text.splitlines() == [
        "    0   1",
        " 0  o   o",
        "         ",
        " 1  o   o",
    ]


def test_drawn_lines_and_owner(small_game, play):
    state = play(small_game, "h:0:0", "h:1:0", "v:0:0", "v:0:1")
    rows = render_board(state).splitlines()
    assert rows[1].startswith(" 0  o---o")
    assert rows[2].startswith("    | B |")


def test_scores_mark_active_player(small_game):
    text = render_scores(small_game)
    assert text.splitlines()[0].startswith(" > Alice")
    assert text.splitlines()[1].startswith("   Bob")
