"""
Flask JSON API for hosting Dots and Boxes rooms.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from dotsboxes.config import DEFAULT_AVATAR
from dotsboxes.game.errors import IllegalMove, InvalidConfiguration, RoomClosed, RoomNotFound
from dotsboxes.rooms import RoomStore, room_to_dict

logger = logging.getLogger(__name__)


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def create_app(store: RoomStore | None = None) -> Flask:
    """
    Build the Flask app.

    Args:
        store: Room store to serve (a fresh in-memory store if omitted)
    """
    app = Flask(__name__)
    rooms = store if store is not None else RoomStore()
    app.config["ROOM_STORE"] = rooms

    @app.errorhandler(RoomNotFound)
    def room_not_found(e):
        return _error(str(e), 404)

    @app.errorhandler(RoomClosed)
    def room_closed(e):
        return _error("Cannot join room", 400)

    @app.errorhandler(InvalidConfiguration)
    def invalid_configuration(e):
        return _error(str(e), 400)

    @app.errorhandler(IllegalMove)
    def illegal_move(e):
        return _error(str(e), 400 if e.reason == "malformed" else 409)

    @app.route("/api/rooms", methods=["POST"])
    def create_room():
        body = request.get_json(silent=True) or {}
        max_players = body.get("maxPlayers")
        grid_size = body.get("gridSize")
        player_name = body.get("playerName")

        if not max_players or not grid_size or not player_name:
            return _error("Missing required fields", 400)

        room = rooms.create_room(
            max_players, grid_size, player_name, body.get("playerAvatar") or DEFAULT_AVATAR
        )
        return jsonify(room_to_dict(room))

    @app.route("/api/rooms/<code>", methods=["GET"])
    def get_room(code: str):
        return jsonify(room_to_dict(rooms.get_room(code)))

    @app.route("/api/rooms/<code>/join", methods=["POST"])
    def join_room(code: str):
        body = request.get_json(silent=True) or {}
        player_name = body.get("playerName")
        if not player_name:
            return _error("Player name required", 400)

        room = rooms.join_room(code, player_name, body.get("playerAvatar") or DEFAULT_AVATAR)
        return jsonify(room_to_dict(room))

    @app.route("/api/rooms/<code>/start", methods=["POST"])
    def start_game(code: str):
        return jsonify(room_to_dict(rooms.start_game(code)))

    @app.route("/api/rooms/<code>/moves", methods=["POST"])
    def submit_move(code: str):
        body = request.get_json(silent=True) or {}
        player_id = body.get("playerId")
        line = body.get("line")
        if not player_id or not line:
            return _error("Missing required fields", 400)

        room = rooms.submit_move(code, player_id, line)
        return jsonify(room_to_dict(room))

    logger.debug("Room API ready")
    return app
