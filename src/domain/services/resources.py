"""Resource service: CRUD over ResourceRepository driven by compiled queries.

get_one() is a get-many request filtered on gid with a one-item page, so
every read goes through the same query path.  create_one() and
update_one() re-read the entity after writing and return what storage holds.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.domain.errors import DomainNotFoundError, DomainValidationError
from src.domain.models.enums import FieldKind
from src.domain.models.fields import FieldSchema, FieldSpec
from src.domain.models.gid import is_gid, new_gid
from src.domain.models.pagination import PaginatedResponse, to_paginated_response
from src.domain.models.request import GetManyRequest
from src.domain.models.resources import (
    CreateResourceRequest,
    Resource,
    UpdateResourceRequest,
)
from src.domain.query.params import QueryParams
from src.domain.query.request import compile_get_many_request, get_one_request
from src.domain.repositories.resources import ResourceRepository

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

FIELD_SCHEMA: FieldSchema = {
    "created_at": FieldSpec(FieldKind.DATE),
    "gid": FieldSpec(FieldKind.STRING),
    "name": FieldSpec(FieldKind.STRING),
    "time_zone": FieldSpec(FieldKind.STRING, nullable=True),
    "updated_at": FieldSpec(FieldKind.DATE),
}

SORTABLE_FIELDS: tuple[str, ...] = ("created_at", "gid", "name", "time_zone", "updated_at")


def _parse(model: type[M], data: M | Mapping[str, Any]) -> M:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "unknown"
        raise DomainValidationError(first["msg"], field=field) from exc


def _check_gid(gid: str) -> str:
    if not is_gid(gid):
        raise DomainValidationError(f"Invalid gid: {gid}", field="gid", constraint="gid")
    return gid


class ResourceService:
    field_schema: FieldSchema = FIELD_SCHEMA
    sortable_fields: tuple[str, ...] = SORTABLE_FIELDS

    def __init__(self, repository: ResourceRepository) -> None:
        self._repository = repository

    def compile_request(self, params: QueryParams | str) -> GetManyRequest:
        return compile_get_many_request(params, self.field_schema, self.sortable_fields)

    async def get_many(
        self, params: QueryParams | str | GetManyRequest
    ) -> PaginatedResponse[Resource]:
        request = params if isinstance(params, GetManyRequest) else self.compile_request(params)
        page = await self._repository.get_many(request)
        return to_paginated_response(
            page.items,
            page.items_total,
            request.pagination.page,
            request.pagination.page_size,
        )

    async def get_one(self, gid: str) -> Resource:
        """Raises DomainNotFoundError when no resource has this gid."""
        response = await self.get_many(get_one_request("gid", _check_gid(gid)))
        if not response.items:
            raise DomainNotFoundError(f"Entity with gid {gid} not found", "entity", gid)
        return response.items[0]

    async def create_one(self, request: CreateResourceRequest | Mapping[str, Any]) -> Resource:
        parsed = _parse(CreateResourceRequest, request)
        now = datetime.now(timezone.utc)
        entity = Resource(
            gid=new_gid(),
            name=parsed.name,
            time_zone=parsed.time_zone,
            created_at=now,
            created_by=parsed.created_by,
            updated_at=now,
            updated_by=parsed.created_by,
        )
        await self._repository.create_one(entity)
        logger.info("created resource %s", entity.gid)
        return await self.get_one(entity.gid)

    async def update_one(
        self, gid: str, request: UpdateResourceRequest | Mapping[str, Any]
    ) -> Resource:
        """Write only the fields the request explicitly sets, then re-read."""
        gid = _check_gid(gid)
        parsed = _parse(UpdateResourceRequest, request)
        changes = parsed.model_dump(exclude_unset=True, exclude={"updated_by"})
        await self._repository.update_many(
            [{"gid": gid, **changes}],
            parsed.updated_by,
            datetime.now(timezone.utc),
        )
        fields = ", ".join(sorted(changes)) or "no field changes"
        logger.info("updated resource %s (%s)", gid, fields)
        return await self.get_one(gid)

    async def delete_one(self, gid: str) -> None:
        await self._repository.delete_many([_check_gid(gid)])
        logger.info("deleted resource %s", gid)
