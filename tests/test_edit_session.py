from typing import List

import pytest

from core.data import EntityStore, RemoteError, TransportError
from core.domain import ValidationError
from core.session import EditMode
from use_cases.clinic import DoctorEditSession
from use_cases.clinic.domain import Doctor, DoctorDraft


class StubDoctorRepository:
    """Repository double that records calls and returns canned results."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    async def list(self):
        return []

    async def create(self, draft: DoctorDraft) -> Doctor:
        self.calls.append(("create", draft))
        if self.error:
            raise self.error
        return self.result

    async def update(self, id: int, draft: DoctorDraft) -> Doctor:
        self.calls.append(("update", id, draft))
        if self.error:
            raise self.error
        return self.result

    async def delete(self, id: int) -> None:
        self.calls.append(("delete", id))


@pytest.fixture
def store():
    return EntityStore([
        Doctor(id=1, name="Dr. Grey", speciality="Cardiology"),
        Doctor(id=3, name="Dr. Bailey", speciality="Surgery"),
    ])


def test_initial_state_is_create_with_empty_draft(store):
    session = DoctorEditSession(StubDoctorRepository(), store)
    assert session.mode is EditMode.CREATE
    assert session.target is None
    assert session.draft == {"name": "", "speciality": ""}
    assert session.submit_label == "Add Doctor"


async def test_create_submit_appends_server_entity_and_clears_draft(store):
    repo = StubDoctorRepository(result=Doctor(id=7, name="Dr. A", speciality="Ophthalmology"))
    session = DoctorEditSession(repo, store)
    session.update_field("name", "Dr. A")
    session.update_field("speciality", "Ophthalmology")

    result = await session.submit()

    assert result.success
    assert result.mode is EditMode.CREATE
    assert repo.calls == [("create", DoctorDraft(name="Dr. A", speciality="Ophthalmology"))]
    assert [d.id for d in store.get_all()] == [1, 3, 7]
    assert store.get_all()[-1] == Doctor(id=7, name="Dr. A", speciality="Ophthalmology")
    assert session.mode is EditMode.CREATE
    assert session.draft == {"name": "", "speciality": ""}


async def test_store_receives_server_representation_not_draft(store):
    repo = StubDoctorRepository(result=Doctor(id=8, name="Dr. A.", speciality="Ophthalmology"))
    session = DoctorEditSession(repo, store)
    session.update_field("name", "  Dr. A  ")
    session.update_field("speciality", "ophthalmology")

    await session.submit()

    assert store.get(8).name == "Dr. A."
    assert store.get(8).speciality == "Ophthalmology"


def test_begin_edit_populates_draft(store):
    session = DoctorEditSession(StubDoctorRepository(), store)
    session.begin_edit(store.get(3))

    assert session.mode is EditMode.EDIT
    assert session.target.id == 3
    assert session.draft == {"name": "Dr. Bailey", "speciality": "Surgery"}
    assert session.submit_label == "Update Doctor"


def test_begin_edit_then_cancel_restores_create(store):
    before = store.get_all()
    session = DoctorEditSession(StubDoctorRepository(), store)
    session.begin_edit(store.get(3))
    session.update_field("name", "changed")

    session.cancel()

    assert session.mode is EditMode.CREATE
    assert session.draft == {"name": "", "speciality": ""}
    assert store.get_all() == before


async def test_edit_submit_replaces_in_place_and_returns_to_create(store):
    updated = Doctor(id=1, name="Dr. Grey", speciality="Cardiothoracic")
    repo = StubDoctorRepository(result=updated)
    session = DoctorEditSession(repo, store)
    session.begin_edit(store.get(1))
    session.update_field("speciality", "Cardiothoracic")

    result = await session.submit()

    assert result.success
    assert result.mode is EditMode.EDIT
    assert repo.calls == [("update", 1, DoctorDraft(name="Dr. Grey", speciality="Cardiothoracic"))]
    assert store.get_all() == [updated, Doctor(id=3, name="Dr. Bailey", speciality="Surgery")]
    assert session.mode is EditMode.CREATE
    assert session.draft == {"name": "", "speciality": ""}


def test_update_field_keeps_mode(store):
    session = DoctorEditSession(StubDoctorRepository(), store)
    session.begin_edit(store.get(1))
    session.update_field("name", "Dr. Meredith Grey")
    assert session.mode is EditMode.EDIT
    assert session.draft["name"] == "Dr. Meredith Grey"


def test_update_field_rejects_unknown_field(store):
    session = DoctorEditSession(StubDoctorRepository(), store)
    with pytest.raises(KeyError):
        session.update_field("email", "x@y.z")


async def test_submit_with_empty_name_raises_without_network_call(store):
    repo = StubDoctorRepository(result=Doctor(id=9, name="x", speciality="y"))
    session = DoctorEditSession(repo, store)
    session.update_field("speciality", "Ophthalmology")

    with pytest.raises(ValidationError) as info:
        await session.submit()

    assert info.value.fields == ["name"]
    assert repo.calls == []
    assert session.mode is EditMode.CREATE
    assert session.draft == {"name": "", "speciality": "Ophthalmology"}
    assert len(store) == 2


async def test_whitespace_only_field_is_not_empty(store):
    repo = StubDoctorRepository(result=Doctor(id=1, name="Dr. A", speciality="   "))
    session = DoctorEditSession(repo, store)
    session.begin_edit(store.get(1))
    session.update_field("speciality", "   ")

    result = await session.submit()

    assert result.success
    assert len(repo.calls) == 1
    assert session.mode is EditMode.CREATE


async def test_failed_update_leaves_store_and_draft_untouched(store, caplog):
    repo = StubDoctorRepository(error=RemoteError(500, "boom"))
    session = DoctorEditSession(repo, store)
    session.begin_edit(store.get(1))
    session.update_field("speciality", "Cardiothoracic")
    before = store.get_all()

    with caplog.at_level("WARNING", logger="core.session"):
        result = await session.submit()

    assert not result.success
    assert isinstance(result.error, RemoteError)
    assert result.error.status == 500
    assert store.get_all() == before
    assert session.mode is EditMode.EDIT
    assert session.target.id == 1
    assert session.draft == {"name": "Dr. Grey", "speciality": "Cardiothoracic"}
    assert len(repo.calls) == 1
    warnings = [r for r in caplog.records if r.levelname == "WARNING"]
    assert len(warnings) == 1


async def test_failed_create_keeps_draft_for_retry(store):
    repo = StubDoctorRepository(error=TransportError("offline"))
    session = DoctorEditSession(repo, store)
    session.update_field("name", "Dr. A")
    session.update_field("speciality", "Ophthalmology")

    result = await session.submit()

    assert not result.success
    assert session.draft == {"name": "Dr. A", "speciality": "Ophthalmology"}
    assert len(store) == 2

    repo.error = None
    repo.result = Doctor(id=7, name="Dr. A", speciality="Ophthalmology")
    assert (await session.submit()).success
    assert 7 in store


async def test_update_for_deleted_doctor_is_not_resurrected(store):
    repo = StubDoctorRepository(result=Doctor(id=3, name="Dr. Bailey", speciality="Trauma"))
    session = DoctorEditSession(repo, store)
    session.begin_edit(store.get(3))
    store.apply_delete(3)

    result = await session.submit()

    assert result.success
    assert 3 not in store
    assert session.mode is EditMode.CREATE


def test_to_dict(store):
    session = DoctorEditSession(StubDoctorRepository(), store)
    session.begin_edit(store.get(1))
    data = session.to_dict()
    assert data["mode"] == "edit"
    assert data["target_id"] == 1
    assert data["draft"] == {"name": "Dr. Grey", "speciality": "Cardiology"}
    assert data["missing_fields"] == []
    assert data["submit_label"] == "Update Doctor"
    assert data["can_cancel"] is True
