"""Row update batches.

A batch is a sequence of mappings, each holding the row identifier plus the
columns to change.  A column whose value is UNSET (or that is absent) is
left untouched for that row; None means "write NULL".
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any


class _Unset(Enum):
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET

RowUpdate = Mapping[str, Any]
