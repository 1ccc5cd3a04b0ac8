"""
Unit tests for the in-memory room store.
"""

import pytest

from dotsboxes.config import ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH
from dotsboxes.game import IllegalMove, InvalidConfiguration, LineId
from dotsboxes.game.errors import RoomClosed, RoomNotFound
from dotsboxes.rooms import room_to_dict


class TestCreateAndJoin:
    """Test the lobby lifecycle."""

    def test_create_room(self, store):
        room = store.create_room(2, 5, "Alice", "🧑‍🚀")
        assert len(room.code) == ROOM_CODE_LENGTH
        assert set(room.code) <= set(ROOM_CODE_ALPHABET)
        assert [p.name for p in room.players] == ["Alice"]
        assert room.started is False
        assert room.game is None
        assert len(store) == 1

    def test_default_avatar(self, store):
        room = store.create_room(2, 3, "Alice")
        assert room.players[0].avatar

    @pytest.mark.parametrize(
        "max_players,grid_size,name",
        [(3, 5, "Alice"), (2, 4, "Alice"), (2, 5, ""), (2, 5, "   "), (True, 5, "Alice")],
    )
    def test_create_invalid(self, store, max_players, grid_size, name):
        with pytest.raises(InvalidConfiguration):
            store.create_room(max_players, grid_size, name)

    def test_unique_codes(self, store):
        codes = {store.create_room(2, 3, f"Host{i}").code for i in range(50)}
        assert len(codes) == 50

    def test_join_normalizes_code(self, store):
        room = store.create_room(4, 3, "Alice")
        joined = store.join_room(f"  {room.code.lower()} ", "Bob", "👽")
        assert joined is room
        assert [p.name for p in room.players] == ["Alice", "Bob"]

    def test_rejoin_same_name(self, store):
        room = store.create_room(2, 3, "Alice")
        store.join_room(room.code, "Alice")
        assert len(room.players) == 1

    def test_join_unknown(self, store):
        with pytest.raises(RoomNotFound):
            store.join_room("NOPE00", "Bob")
        with pytest.raises(RoomNotFound):
            store.get_room("NOPE00")

    def test_join_full(self, store):
        room = store.create_room(2, 3, "Alice")
        store.join_room(room.code, "Bob")
        with pytest.raises(RoomClosed):
            store.join_room(room.code, "Carol")

    def test_join_started(self, store):
        room = store.create_room(4, 3, "Alice")
        store.start_game(room.code)
        with pytest.raises(RoomClosed):
            store.join_room(room.code, "Bob")


class TestMatch:
    """Test starting matches and relaying moves."""

    def test_start_fills_empty_seats(self, store):
        room = store.create_room(4, 3, "Alice")
        store.join_room(room.code, "Bob")
        store.start_game(room.code)

        assert room.started and room.started_at is not None
        players = room.game.players
        assert [p.is_ai for p in players] == [False, False, True, True]
        assert players[0].id == room.players[0].id
        assert len({p.color for p in players}) == 4
        assert room.game.size == 3
        assert room.game.active_player.id == room.players[0].id

    def test_start_twice(self, store):
        room = store.create_room(2, 3, "Alice")
        store.join_room(room.code, "Bob")
        game = store.start_game(room.code).game
        assert store.start_game(room.code).game is game

    def test_move_before_start(self, store):
        room = store.create_room(2, 3, "Alice")
        with pytest.raises(IllegalMove):
            store.submit_move(room.code, room.players[0].id, "h:0:0")

    def test_only_active_player_moves(self, store):
        room = store.create_room(2, 3, "Alice")
        store.join_room(room.code, "Bob")
        store.start_game(room.code)
        alice, bob = (p.id for p in room.players)

        with pytest.raises(IllegalMove):
            store.submit_move(room.code, bob, "h:0:0")
        store.submit_move(room.code, alice, "h:0:0")
        assert room.game.lines[LineId.h(0, 0)].owner == alice
        assert room.game.active_player.id == bob
        with pytest.raises(IllegalMove):
            store.submit_move(room.code, alice, "h:0:1")
        with pytest.raises(IllegalMove):
            store.submit_move(room.code, bob, "h:0:0")  # stale: already drawn

    def test_ai_replies(self, store):
        room = store.create_room(2, 3, "Alice")
        store.start_game(room.code)
        alice = room.players[0].id

        store.submit_move(room.code, alice, "h:0:0")
        game = room.game
        assert game.is_game_over or game.active_player.id == alice
        assert game.owned_line_count >= 2

    def test_play_to_the_end(self, store):
        room = store.create_room(2, 3, "Alice")
        store.start_game(room.code)
        alice = room.players[0].id
        while not room.game.is_game_over:
            store.submit_move(room.code, alice, room.game.open_lines()[0])
        assert room.game.owned_line_count == 24
        assert sum(p.score for p in room.game.players) == 9


class TestSubscriptions:
    """Test change callbacks."""

    def test_notified_on_changes(self, store):
        room = store.create_room(2, 3, "Alice")
        seen = []
        unsubscribe = store.subscribe(room.code, lambda r: seen.append(r.code))
        store.join_room(room.code, "Bob")
        store.start_game(room.code)
        store.submit_move(room.code, room.players[0].id, "h:0:0")
        assert seen == [room.code] * 3

        unsubscribe()
        store.submit_move(room.code, room.players[1].id, "h:0:1")
        assert len(seen) == 3

    def test_rejected_move_not_notified(self, store):
        room = store.create_room(2, 3, "Alice")
        store.join_room(room.code, "Bob")
        store.start_game(room.code)
        seen = []
        store.subscribe(room.code, seen.append)
        with pytest.raises(IllegalMove):
            store.submit_move(room.code, room.players[1].id, "h:0:0")
        assert seen == []

    def test_subscribe_unknown(self, store):
        with pytest.raises(RoomNotFound):
            store.subscribe("NOPE00", print)


class TestEncoding:
    """Test the API representation."""

    def test_room_to_dict(self, store):
        room = store.create_room(2, 3, "Alice", "🧑‍🚀")
        data = room_to_dict(room)
        assert data["code"] == room.code
        assert data["maxPlayers"] == 2
        assert data["gridSize"] == 3
        assert data["players"][0]["name"] == "Alice"
        assert data["game"] is None

        store.start_game(room.code)
        data = room_to_dict(room)
        assert data["started"] is True
        assert len(data["game"]["lines"]) == 24
