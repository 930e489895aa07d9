"""Tests for the persisted clinic store and its CRUD operations."""

import json
from datetime import date, datetime

import pytest

from dental_center.exceptions import OrphanedIncidentError
from dental_center.models.incident import Incident
from dental_center.models.patient import Patient
from dental_center.services.kv import MemoryBackend
from dental_center.services.storage import ClinicStore, ensure_patient_exists


def _patient(patient_id: str = "p9", name: str = "Kavya Iyer") -> Patient:
    return Patient(
        id=patient_id,
        name=name,
        dob=date(1999, 6, 1),
        contact="+91-9000000009",
        health_info="None",
    )


def _incident(incident_id: str = "i99", patient_id: str = "p9") -> Incident:
    return Incident(
        id=incident_id,
        patient_id=patient_id,
        title="Consultation",
        appointment_date=datetime(2025, 5, 1, 10, 0),
    )


def test_initialize_seeds_every_collection(store: ClinicStore) -> None:
    """First start writes the demo users, patients and incidents."""

    assert len(store.get_users()) == 6
    assert len(store.get_patients()) == 5
    assert len(store.get_incidents()) == 14


def test_initialize_is_idempotent(store: ClinicStore, backend: MemoryBackend) -> None:
    """A second initialize leaves stored payloads byte-for-byte unchanged."""

    before = dict(backend.data)
    store.initialize()
    assert backend.data == before


def test_initialize_never_overwrites_existing_collection(backend: MemoryBackend) -> None:
    """Collections that already hold data (even an empty list) are kept."""

    backend.set("dental_patients", "[]")
    clinic_store = ClinicStore(backend)
    clinic_store.initialize()

    assert clinic_store.get_patients() == []
    assert len(clinic_store.get_incidents()) == 14


def test_stored_layout_uses_prefixed_keys(store: ClinicStore, backend: MemoryBackend) -> None:
    """Collections are JSON arrays with camelCase record keys."""

    payload = json.loads(backend.get("dental_incidents"))
    assert payload[0]["patientId"] == "p1"
    assert payload[0]["appointmentDate"] == "2025-01-15T10:00:00"
    assert "password" not in json.loads(backend.get("dental_users"))[0]


def test_custom_key_prefix(backend: MemoryBackend) -> None:
    clinic_store = ClinicStore(backend, key_prefix="clinic2:")
    clinic_store.initialize()

    assert backend.get("clinic2:patients") is not None
    assert backend.get("dental_patients") is None


def test_missing_collection_reads_as_empty() -> None:
    clinic_store = ClinicStore(MemoryBackend())

    assert clinic_store.get_users() == []
    assert clinic_store.get_patients() == []
    assert clinic_store.get_incidents() == []


def test_corrupt_collection_falls_back_to_empty(store: ClinicStore, backend: MemoryBackend) -> None:
    """Unparseable or invalid payloads read as an empty collection."""

    backend.set("dental_patients", "{not json")
    backend.set("dental_incidents", json.dumps([{"id": "broken"}]))

    assert store.get_patients() == []
    assert store.get_incidents() == []


def test_add_patient_appears_exactly_once(store: ClinicStore) -> None:
    patient = _patient()
    store.add_patient(patient)

    matches = [p for p in store.get_patients() if p.id == patient.id]
    assert matches == [patient]


def test_update_patient_replaces_matching_record(store: ClinicStore) -> None:
    original = store.get_patient("p2")
    assert original is not None

    changed = original.model_copy(update={"contact": "+91-9000011111"})
    assert store.update_patient(changed) is True
    assert store.get_patient("p2").contact == "+91-9000011111"
    assert len(store.get_patients()) == 5


def test_update_unknown_patient_leaves_collection_unchanged(store: ClinicStore) -> None:
    before = store.get_patients()

    assert store.update_patient(_patient("missing")) is False
    assert store.get_patients() == before


def test_update_unknown_incident_leaves_collection_unchanged(store: ClinicStore) -> None:
    before = store.get_incidents()

    assert store.update_incident(_incident("missing", "p1")) is False
    assert store.get_incidents() == before


def test_delete_patient_cascades_to_incidents(store: ClinicStore) -> None:
    store.delete_patient("p1")

    assert store.get_patient("p1") is None
    assert all(i.patient_id != "p1" for i in store.get_incidents())
    assert len(store.get_incidents()) == 10


def test_delete_unknown_patient_is_silent(store: ClinicStore) -> None:
    assert store.delete_patient("nobody") is False
    assert len(store.get_patients()) == 5
    assert len(store.get_incidents()) == 14


def test_incident_crud_has_no_cascade(store: ClinicStore) -> None:
    incident = _incident(patient_id="p2")
    store.add_incident(incident)
    assert store.get_incident("i99") == incident

    updated = incident.model_copy(update={"status": "Completed", "cost": 900.0})
    store.update_incident(updated)
    assert store.get_incident("i99").status == "Completed"

    assert store.delete_incident("i99") is True
    assert store.get_incident("i99") is None
    assert store.get_patient("p2") is not None


def test_add_incident_with_unknown_patient_is_accepted(store: ClinicStore) -> None:
    """The store itself does not enforce references; orphans are reportable."""

    store.add_incident(_incident(patient_id="ghost"))

    assert store.get_incident("i99") is not None
    assert [i.id for i in store.find_orphaned_incidents()] == ["i99"]


def test_ensure_patient_exists(store: ClinicStore) -> None:
    assert ensure_patient_exists(store, "p3").name == "Rahul Verma"
    with pytest.raises(OrphanedIncidentError):
        ensure_patient_exists(store, "ghost", "i99")


def test_set_current_user_toggles_auth_flag(store: ClinicStore) -> None:
    admin = store.get_users()[0]

    store.set_current_user(admin)
    assert store.get_current_user() == admin
    assert store.is_authenticated() is True

    store.set_current_user(None)
    assert store.get_current_user() is None
    assert store.is_authenticated() is False


def test_app_state_snapshot(store: ClinicStore) -> None:
    state = store.get_app_state()

    assert len(state.patients) == 5
    assert state.current_user is None
    assert state.is_authenticated is False


def test_admin_scenario(store: ClinicStore, session) -> None:
    """Login as admin, add a patient with an incident, then delete it."""

    assert session.login("admin@entnt.in", "admin123") is True
    assert store.get_current_user().role == "Admin"

    original_count = len(store.get_patients())
    store.add_patient(_patient())
    store.add_incident(_incident())
    assert len(store.get_patients()) == original_count + 1

    store.delete_patient("p9")
    assert len(store.get_patients()) == original_count
    assert store.get_incidents_for_patient("p9") == []


def test_deleting_patient_reports_unlinked_user(store: ClinicStore, caplog: pytest.LogCaptureFixture) -> None:
    assert store.find_unlinked_patient_users() == []

    with caplog.at_level("WARNING", logger="dental_center.services.storage"):
        assert store.delete_patient("p1") is True

    assert [u.email for u in store.find_unlinked_patient_users()] == ["john@entnt.in"]
    assert "john@entnt.in" in caplog.text
