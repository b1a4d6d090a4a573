"""Shared lookups by natural key and the tournament adjacency query."""
from __future__ import annotations

from typing import Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from tournaments.models import Player, Registration, Tournament


async def get_tournament(session: AsyncSession, name: str) -> Optional[Tournament]:
    """Get tournament by name."""
    return await session.get(Tournament, name)


async def get_player(session: AsyncSession, gamertag: str) -> Optional[Player]:
    """Get player by gamertag (exact, case-sensitive)."""
    return await session.get(Player, gamertag)


async def tournament_exists(session: AsyncSession, name: str) -> bool:
    return bool(await session.scalar(select(exists().where(Tournament.name == name))))


async def player_exists(session: AsyncSession, gamertag: str) -> bool:
    return bool(await session.scalar(select(exists().where(Player.gamertag == gamertag))))


async def get_registration(
    session: AsyncSession, tournament_name: str, gamertag: str
) -> Optional[Registration]:
    """Get the registration for a (tournament, player) pair."""
    result = await session.execute(
        select(Registration).where(
            Registration.tournament_name == tournament_name,
            Registration.player_gamertag == gamertag,
        )
    )
    return result.scalar_one_or_none()


async def registration_exists(session: AsyncSession, tournament_name: str, gamertag: str) -> bool:
    return bool(
        await session.scalar(
            select(
                exists().where(
                    Registration.tournament_name == tournament_name,
                    Registration.player_gamertag == gamertag,
                )
            )
        )
    )


async def child_names(session: AsyncSession, parent_name: str) -> list[str]:
    """Names of the direct sub-tournaments of a tournament."""
    result = await session.execute(
        select(Tournament.name)
        .where(Tournament.parent_tournament_name == parent_name)
        .order_by(Tournament.name)
    )
    return list(result.scalars().all())


async def child_tournaments(session: AsyncSession, parent_name: str) -> list[Tournament]:
    result = await session.execute(
        select(Tournament)
        .where(Tournament.parent_tournament_name == parent_name)
        .order_by(Tournament.name)
    )
    return list(result.scalars().all())
