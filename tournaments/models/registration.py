"""Registration model - player enrolled in a tournament."""
from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tournaments.models.base import Base


class Registration(Base):
    """Player registration for a tournament. At most one per (tournament, player)."""

    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint("tournament_name", "player_gamertag", name="uq_registrations_tournament_player"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tournament_name: Mapped[str] = mapped_column(ForeignKey("tournaments.name"), nullable=False, index=True)
    player_gamertag: Mapped[str] = mapped_column(ForeignKey("players.gamertag"), nullable=False, index=True)

    tournament: Mapped["Tournament"] = relationship("Tournament", back_populates="registrations")
    player: Mapped["Player"] = relationship("Player", back_populates="registrations")
