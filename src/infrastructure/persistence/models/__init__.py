"""ORM model registry: importing this package registers every mapper class
with Base.metadata before Alembic or SQLAlchemy runs.
"""

from src.infrastructure.persistence.models.resources import Resource

__all__ = [
    "Resource",
]
