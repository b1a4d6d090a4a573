"""Database models."""
from tournaments.models.base import Base, init_db, reset_db
from tournaments.models.player import Player
from tournaments.models.tournament import Tournament
from tournaments.models.registration import Registration

__all__ = [
    "Base",
    "Player",
    "Tournament",
    "Registration",
    "init_db",
    "reset_db",
]
