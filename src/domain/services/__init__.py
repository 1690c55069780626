"""Domain services package."""

from .resources import FIELD_SCHEMA, SORTABLE_FIELDS, ResourceService

__all__ = ["FIELD_SCHEMA", "SORTABLE_FIELDS", "ResourceService"]
