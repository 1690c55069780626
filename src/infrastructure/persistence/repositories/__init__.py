"""Concrete SQLAlchemy repository implementations.

Exports all SqlRepository classes and the get_repositories() factory function
for wiring at the application boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .resources import SqlResourceRepository


@dataclass
class Repositories:
    """All repository instances bound to a single AsyncSession."""

    resources: SqlResourceRepository


def get_repositories(session: AsyncSession) -> Repositories:
    """Construct all repositories bound to the given session.

        async with AsyncSessionLocal() as session:
            repos = get_repositories(session)
            page = await repos.resources.get_many(request)
    """
    return Repositories(
        resources=SqlResourceRepository(session),
    )


__all__ = [
    "SqlResourceRepository",
    "Repositories",
    "get_repositories",
]
