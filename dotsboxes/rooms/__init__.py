"""
Room hosting module.

Provides RoomStore for creating, joining and starting online matches.
"""

from dotsboxes.rooms.store import Room, RoomPlayer, RoomStore, room_to_dict

__all__ = ["Room", "RoomPlayer", "RoomStore", "room_to_dict"]
