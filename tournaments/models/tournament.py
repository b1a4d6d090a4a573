"""Tournament model."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tournaments.models.base import Base


class Tournament(Base):
    """Tournament keyed by name, optionally nested under a parent tournament."""

    __tablename__ = "tournaments"

    name: Mapped[str] = mapped_column(String(128), primary_key=True)
    parent_tournament_name: Mapped[Optional[str]] = mapped_column(
        ForeignKey("tournaments.name"), nullable=True, index=True
    )

    parent: Mapped[Optional["Tournament"]] = relationship(
        "Tournament", remote_side="Tournament.name", back_populates="sub_tournaments"
    )
    sub_tournaments = relationship("Tournament", back_populates="parent", passive_deletes=True)
    registrations = relationship("Registration", back_populates="tournament", passive_deletes=True)
