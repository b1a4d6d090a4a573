"""Exceptions raised by the tournament services.

Each error carries the HTTP status it maps to, a short title and a
human-readable detail. The web layer renders them as problem details.
"""
from __future__ import annotations


class TournamentsError(Exception):
    """Base exception for all tournament service errors."""

    status_code = 500
    title = "Unexpected error"

    def __init__(self, detail: str, title: str | None = None):
        super().__init__(detail)
        self.detail = detail
        if title is not None:
            self.title = title


class NotFoundError(TournamentsError):
    """Referenced player, tournament or registration does not exist."""

    status_code = 404
    title = "Not found"


class ConflictError(TournamentsError):
    """Unique key already taken: gamertag, tournament name or registration pair."""

    status_code = 409
    title = "Conflict"


class InvalidRequestError(TournamentsError):
    """Malformed input, hierarchy violation or missing parent registration."""

    status_code = 400
    title = "Invalid request"


class StorageFailureError(TournamentsError):
    """The store could not complete a write. Nothing was applied."""

    status_code = 500
    title = "Storage failure"
