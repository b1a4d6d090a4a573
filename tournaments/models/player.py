"""Player model."""
from __future__ import annotations

from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tournaments.models.base import Base

MIN_AGE = 1
MAX_AGE = 200


class Player(Base):
    """Player identified by an immutable, case-sensitive gamertag."""

    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint(f"age >= {MIN_AGE} AND age <= {MAX_AGE}", name="ck_players_age_range"),
    )

    gamertag: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    age: Mapped[int] = mapped_column(Integer, nullable=False, default=MIN_AGE)

    registrations = relationship("Registration", back_populates="player", passive_deletes=True)
