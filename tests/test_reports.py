"""Tests for dashboard figures and patient views over the demo data."""

from datetime import datetime

from dental_center.services.reports import (
    admin_dashboard,
    filter_incidents,
    patient_dashboard,
    revenue_stats,
    search_patients,
    split_appointments,
    top_patients,
    treatment_history,
    treatment_stats,
    upcoming_appointments,
)
from dental_center.services.storage import ClinicStore

FEB_1 = datetime(2025, 2, 1)
MAR_1 = datetime(2025, 3, 1)


def _ids(incidents) -> list:
    return [i.id for i in incidents]


def test_upcoming_appointments_are_pending_and_future(store: ClinicStore) -> None:
    incidents = store.get_incidents()

    assert _ids(upcoming_appointments(incidents, FEB_1)) == ["i4", "i14"]
    assert _ids(upcoming_appointments(incidents, MAR_1)) == ["i14"]
    assert _ids(upcoming_appointments(incidents, FEB_1, limit=1)) == ["i4"]


def test_appointment_at_now_is_not_upcoming(store: ClinicStore) -> None:
    incidents = store.get_incidents()

    assert "i4" not in _ids(upcoming_appointments(incidents, datetime(2025, 2, 15, 10, 0)))


def test_top_patients_ranked_by_incident_count(store: ClinicStore) -> None:
    ranked = top_patients(store.get_incidents(), store.get_patients())

    assert [(t.patient.id, t.count) for t in ranked] == [
        ("p1", 4),
        ("p2", 3),
        ("p3", 3),
        ("p4", 2),
        ("p5", 2),
    ]


def test_top_patients_skips_unknown_patients(store: ClinicStore) -> None:
    patients = [p for p in store.get_patients() if p.id != "p1"]

    ranked = top_patients(store.get_incidents(), patients, limit=2)
    assert [t.patient.id for t in ranked] == ["p2", "p3"]


def test_revenue_and_treatment_stats(store: ClinicStore) -> None:
    incidents = store.get_incidents()

    revenue = revenue_stats(incidents)
    assert revenue.total_revenue == 47400
    assert revenue.pending_revenue == 600

    stats = treatment_stats(incidents)
    assert (stats.completed, stats.pending, stats.cancelled) == (12, 2, 0)


def test_admin_dashboard(store: ClinicStore) -> None:
    dashboard = admin_dashboard(store, now=FEB_1)

    assert dashboard.total_patients == 5
    assert dashboard.total_incidents == 14
    assert _ids(dashboard.upcoming_appointments) == ["i4", "i14"]
    assert dashboard.top_patients[0].patient.name == "Arjun Sharma"


def test_patient_dashboard(store: ClinicStore) -> None:
    dashboard = patient_dashboard(store, "p1", now=MAR_1)

    assert dashboard.patient.name == "Arjun Sharma"
    assert _ids(dashboard.upcoming_appointments) == ["i14"]
    assert dashboard.treatments.completed == 2
    assert dashboard.treatments.pending == 2
    assert dashboard.total_spent == 9200


def test_split_appointments(store: ClinicStore) -> None:
    split = split_appointments(store.get_incidents_for_patient("p1"), now=MAR_1)

    assert _ids(split.upcoming) == ["i14"]
    assert _ids(split.past) == ["i13", "i4", "i1"]


def test_split_appointments_with_status_filter(store: ClinicStore) -> None:
    split = split_appointments(store.get_incidents_for_patient("p1"), now=MAR_1, status="Completed")

    assert split.upcoming == []
    assert _ids(split.past) == ["i13", "i1"]


def test_treatment_history(store: ClinicStore) -> None:
    history = treatment_history(store.get_incidents_for_patient("p1"))

    assert _ids(history.treatments) == ["i14", "i13", "i1"]
    assert history.total_cost == 9200
    assert history.completed_count == 2


def test_search_patients(store: ClinicStore) -> None:
    patients = store.get_patients()

    assert [p.id for p in search_patients(patients, "PRIYA")] == ["p2"]
    assert [p.id for p in search_patients(patients, "+91-98")] == ["p1", "p2"]
    assert len(search_patients(patients, "")) == 5


def test_filter_incidents(store: ClinicStore) -> None:
    incidents = store.get_incidents()
    patients = store.get_patients()

    assert _ids(filter_incidents(incidents, patients, "cleaning")) == ["i8"]
    assert _ids(filter_incidents(incidents, patients, "arjun")) == ["i1", "i4", "i13", "i14"]
    assert _ids(filter_incidents(incidents, patients, "arjun", "Pending")) == ["i4", "i14"]
    assert _ids(filter_incidents(incidents, patients, status="Cancelled")) == []
