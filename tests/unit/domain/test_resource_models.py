"""Tests for resource, audit and update models."""

import pytest
from pydantic import TypeAdapter, ValidationError

from src.domain.models.audit import AuditRecord, SystemAuditRecord, UserAuditRecord
from src.domain.models.gid import is_gid
from src.domain.models.resources import (
    CreateResourceRequest,
    Resource,
    UpdateResourceRequest,
)
from src.domain.models.updates import UNSET

SYSTEM = SystemAuditRecord(system="importer")


def _resource(**overrides):
    defaults = dict(name="Room A", time_zone="Europe/Paris", created_by=SYSTEM, updated_by=SYSTEM)
    defaults.update(overrides)
    return Resource(**defaults)


# --- audit records ---

def test_audit_record_discriminates_on_type():
    record = TypeAdapter(AuditRecord).validate_python({"type": "USER", "gid": "999.x"})
    assert isinstance(record, UserAuditRecord)
    assert record.email is None


def test_audit_record_rejects_unknown_type():
    with pytest.raises(ValidationError):
        TypeAdapter(AuditRecord).validate_python({"type": "ROBOT"})


# --- Resource ---

def test_resource_gets_gid():
    assert is_gid(_resource().gid)


def test_resource_timestamps_are_aware():
    assert _resource().created_at.tzinfo is not None


def test_resource_rejects_empty_name():
    with pytest.raises(ValidationError):
        _resource(name="")


def test_resource_rejects_unknown_time_zone():
    with pytest.raises(ValidationError):
        _resource(time_zone="Mars/Olympus")


def test_resource_accepts_no_time_zone():
    assert _resource(time_zone=None).time_zone is None


def test_resource_is_frozen():
    resource = _resource()
    with pytest.raises(ValidationError):
        resource.name = "other"


# --- requests ---

def test_create_request_forbids_extra_fields():
    with pytest.raises(ValidationError):
        CreateResourceRequest(name="a", created_by=SYSTEM, gid="999.x")


def test_update_request_tracks_explicit_fields():
    request = UpdateResourceRequest(time_zone=None, updated_by=SYSTEM)
    assert request.model_dump(exclude_unset=True, exclude={"updated_by"}) == {"time_zone": None}


def test_update_request_rejects_null_name():
    with pytest.raises(ValidationError):
        UpdateResourceRequest(name=None, updated_by=SYSTEM)


def test_update_request_without_name_leaves_it_unset():
    request = UpdateResourceRequest(updated_by=SYSTEM)
    assert "name" not in request.model_fields_set


# --- UNSET ---

def test_unset_is_singleton_and_distinct_from_none():
    assert UNSET is not None
    assert repr(UNSET) == "UNSET"
