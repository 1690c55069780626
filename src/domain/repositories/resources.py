"""Resource repository interface."""

from __future__ import annotations

from src.domain.models.resources import Resource

from .base import Repository


class ResourceRepository(Repository[Resource]):
    """Read/write interface for Resource entities.

    get_many() filters on any Resource column named in the request; columns
    the storage does not know are ignored rather than rejected.
    create_one() raises DomainConstraintViolationError when the gid or name
    already exists.
    """
