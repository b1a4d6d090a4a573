"""Tournament nesting rules: depth limit, self-parent and cycle checks."""
from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from tournaments.errors import InvalidRequestError
from tournaments.models import Tournament
from tournaments.services.lookups import child_names, get_tournament

logger = logging.getLogger("tournaments.hierarchy")

# Root is depth 1; a tournament at this depth may not gain children.
MAX_NESTING_DEPTH = 5

DEPTH_EXCEEDED_TITLE = "Maximum tournament nesting depth exceeded"
DEPTH_EXCEEDED_DETAIL = (
    f"Tournaments can only be nested up to {MAX_NESTING_DEPTH} levels deep "
    "(parent-child-child-child-child)"
)
INVALID_HIERARCHY_TITLE = "Invalid tournament hierarchy"


async def ancestor_names(session: AsyncSession, tournament: Tournament) -> list[str]:
    """Names along the parent chain, starting with the tournament itself and ending at its root.

    A parent name that does not resolve ends the chain. Parents already in the
    session's identity map are not fetched again.
    """
    chain = [tournament.name]
    current = tournament
    while current.parent_tournament_name:
        if current.parent_tournament_name in chain:
            logger.warning("Parent cycle detected at tournament %r", current.parent_tournament_name)
            break
        parent = await get_tournament(session, current.parent_tournament_name)
        if parent is None:
            break
        chain.append(parent.name)
        current = parent
    return chain


async def compute_depth(session: AsyncSession, tournament: Tournament) -> int:
    """Nesting depth of a tournament: 1 for a root, parent's depth + 1 otherwise."""
    return len(await ancestor_names(session, tournament))


async def subtree_height(session: AsyncSession, name: str) -> int:
    """Number of levels in the subtree rooted at ``name`` (1 for a leaf)."""
    height = 1
    level = [name]
    seen = {name}
    while True:
        next_level = []
        for parent_name in level:
            for child in await child_names(session, parent_name):
                if child not in seen:
                    seen.add(child)
                    next_level.append(child)
        if not next_level:
            return height
        height += 1
        level = next_level


async def _require_parent(session: AsyncSession, parent_name: str) -> Tournament:
    parent = await get_tournament(session, parent_name)
    if parent is None:
        raise InvalidRequestError(
            f"Parent tournament '{parent_name}' does not exist.",
            title=INVALID_HIERARCHY_TITLE,
        )
    return parent


def _depth_exceeded(name: str, parent_name: str) -> InvalidRequestError:
    logger.info("Rejected nesting %r under %r: depth limit %d", name, parent_name, MAX_NESTING_DEPTH)
    return InvalidRequestError(DEPTH_EXCEEDED_DETAIL, title=DEPTH_EXCEEDED_TITLE)


async def validate_new_tournament(session: AsyncSession, name: str, parent_name: str | None) -> None:
    """Check that a tournament named ``name`` may be created under ``parent_name``."""
    if not parent_name:
        return
    parent = await _require_parent(session, parent_name)
    if await compute_depth(session, parent) >= MAX_NESTING_DEPTH:
        raise _depth_exceeded(name, parent_name)


async def validate_reparent(session: AsyncSession, tournament: Tournament, new_parent_name: str | None) -> None:
    """Check that ``tournament`` may be moved under ``new_parent_name``.

    Nothing is checked when the parent does not change. The moved subtree must
    still fit within the depth limit once attached to the new parent.
    """
    if (new_parent_name or None) == (tournament.parent_tournament_name or None):
        return
    if new_parent_name == tournament.name:
        logger.info("Rejected self-parent for tournament %r", tournament.name)
        raise InvalidRequestError("A tournament cannot be its own parent", title=INVALID_HIERARCHY_TITLE)
    if not new_parent_name:
        return
    parent = await _require_parent(session, new_parent_name)
    chain = await ancestor_names(session, parent)
    if tournament.name in chain:
        logger.info("Rejected cycle: %r is a descendant of %r", new_parent_name, tournament.name)
        raise InvalidRequestError(
            "A tournament cannot be nested under one of its own sub-tournaments",
            title=INVALID_HIERARCHY_TITLE,
        )
    if len(chain) + await subtree_height(session, tournament.name) > MAX_NESTING_DEPTH:
        raise _depth_exceeded(tournament.name, new_parent_name)
