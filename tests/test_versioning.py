import uuid

import pytest
from sqlalchemy.exc import OperationalError

from app.errors import ForbiddenError, NotFoundError, StorageError
from app.models import Tender
from app.versioning import tender_store


def _broken(*args, **kwargs):
    raise OperationalError("INSERT", {}, Exception("database is unavailable"))


def test_edit_records_previous_state(session, make_tender):
    tender = make_tender(name="Original", description="Old text")
    store = tender_store(session)

    store.apply_edit(tender, {"name": "Renamed", "description": "New text"})

    versions = store.versions(tender.id)
    assert len(versions) == 1
    assert versions[0].tender_id == tender.id
    assert (versions[0].name, versions[0].description) == ("Original", "Old text")
    assert (tender.name, tender.description) == ("Renamed", "New text")


def test_empty_fields_in_patch_change_nothing(session, make_tender):
    tender = make_tender(name="Original", description="Old text")

    tender_store(session).apply_edit(tender, {"name": "", "description": "x"})

    session.expire_all()
    stored = session.get(Tender, tender.id)
    assert stored.name == "Original"
    assert stored.description == "x"


def test_missing_fields_in_patch_change_nothing(session, make_tender):
    tender = make_tender(name="Original", description="Old text")

    tender_store(session).apply_edit(tender, {"description": None})

    assert (tender.name, tender.description) == ("Original", "Old text")


def test_rollback_restores_version_fields(session, make_tender):
    tender = make_tender(name="v1", description="first")
    store = tender_store(session)
    store.apply_edit(tender, {"name": "v2", "description": "second"})
    store.apply_edit(tender, {"name": "v3"})
    first, second = store.versions(tender.id)
    assert (first.name, second.name) == ("v1", "v2")

    store.rollback(tender, first.id)

    session.expire_all()
    stored = session.get(Tender, tender.id)
    assert (stored.name, stored.description) == ("v1", "first")


def test_rollback_does_not_record_a_version(session, make_tender):
    tender = make_tender(name="v1")
    store = tender_store(session)
    store.apply_edit(tender, {"name": "v2"})
    version = store.versions(tender.id)[0]

    store.rollback(tender, version.id)

    assert len(store.versions(tender.id)) == 1


def test_rollback_to_unknown_version_is_not_found(session, make_tender):
    tender = make_tender()
    with pytest.raises(NotFoundError):
        tender_store(session).rollback(tender, uuid.uuid4())


def test_rollback_to_version_of_another_entity_is_forbidden(session, make_tender):
    tender = make_tender(name="Mine")
    other = make_tender(name="Theirs")
    store = tender_store(session)
    store.apply_edit(other, {"name": "Theirs, edited"})
    foreign_version = store.versions(other.id)[0]

    with pytest.raises(ForbiddenError):
        store.rollback(tender, foreign_version.id)
    assert tender.name == "Mine"


def test_failed_snapshot_stops_the_edit(session, make_tender, monkeypatch):
    tender = make_tender(name="Original")
    store = tender_store(session)
    monkeypatch.setattr(session, "commit", _broken)

    with pytest.raises(StorageError):
        store.apply_edit(tender, {"name": "Changed"})

    monkeypatch.undo()
    session.expire_all()
    assert session.get(Tender, tender.id).name == "Original"
    assert store.versions(tender.id) == []


def test_failed_update_keeps_snapshot_and_old_state(session, make_tender, monkeypatch):
    tender = make_tender(name="Original")
    store = tender_store(session)
    real_commit = session.commit
    calls = []

    def commit_once():
        calls.append(1)
        if len(calls) > 1:
            _broken()
        real_commit()

    monkeypatch.setattr(session, "commit", commit_once)
    with pytest.raises(StorageError):
        store.apply_edit(tender, {"name": "Changed"})

    monkeypatch.undo()
    session.expire_all()
    assert session.get(Tender, tender.id).name == "Original"
    assert [v.name for v in store.versions(tender.id)] == ["Original"]


def test_rapid_edits_are_listed_in_order(session, make_tender):
    tender = make_tender(name="v1")
    store = tender_store(session)
    store.apply_edit(tender, {"name": "v2"})
    store.apply_edit(tender, {"name": "v3"})
    store.apply_edit(tender, {"name": "v4"})

    versions = store.versions(tender.id)
    assert [v.name for v in versions] == ["v1", "v2", "v3"]
    assert all(v.created_at is not None for v in versions)
