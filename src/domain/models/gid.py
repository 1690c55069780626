"""Global identifiers: ``<prefix>.<uuid4>``."""

from __future__ import annotations

import re
from uuid import UUID, uuid4

GID_PREFIX = "999"
GID_DELIMITER = "."

_GID_RE = re.compile(
    r"^[0-9]{3,4}\.[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
)


def new_gid(uuid: UUID | None = None) -> str:
    return f"{GID_PREFIX}{GID_DELIMITER}{uuid or uuid4()}"


def is_gid(value: object) -> bool:
    return isinstance(value, str) and _GID_RE.match(value) is not None
