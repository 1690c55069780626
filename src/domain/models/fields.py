"""Field schema: the per-entity description of filterable fields."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .enums import FieldKind


@dataclass(frozen=True)
class FieldSpec:
    """Declared type of one filterable field.

    choices only matters for ENUM fields; an empty tuple accepts any string.
    """

    kind: FieldKind
    nullable: bool = False
    choices: tuple[str, ...] = ()


FieldSchema = Mapping[str, FieldSpec]
