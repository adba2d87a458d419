"""a minimal competitor holding an opaque id and its current rating"""
from typing import Any, Optional
from tsrank.models.rating import Rating


class Player:
    """
    Represents a player in a ranking.

    The id is whatever identifies the player to the caller (a name, a database key, ...).
    Equality and hashing are by object identity, two Player objects with the same id are distinct competitors.
    When rating is None the pool assigns its default rating on insertion.
    """

    def __init__(self, id: Any, rating: Optional[Rating] = None):
        self.id = id
        self.rating = rating

    def __repr__(self):
        return f'Player(id={self.id!r}, rating={self.rating!r})'
