"""Dashboard figures and per-role incident views."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Iterable, List, Literal, Optional, Sequence

from pydantic import Field

from dental_center.models.base import Base
from dental_center.models.incident import Incident
from dental_center.models.patient import Patient
from dental_center.services.storage import ClinicStore

LOGGER = logging.getLogger(__name__)

UPCOMING_LIMIT = 10
TOP_PATIENTS_LIMIT = 5


class TopPatient(Base):
    patient: Patient
    count: int


class RevenueStats(Base):
    total_revenue: float = 0
    pending_revenue: float = 0


class TreatmentStats(Base):
    completed: int = 0
    pending: int = 0
    cancelled: int = 0


class AdminDashboard(Base):
    role: Literal["Admin"] = "Admin"
    total_patients: int
    total_incidents: int
    upcoming_appointments: List[Incident] = Field(default_factory=list)
    top_patients: List[TopPatient] = Field(default_factory=list)
    revenue: RevenueStats
    treatments: TreatmentStats


class PatientDashboard(Base):
    role: Literal["Patient"] = "Patient"
    patient: Optional[Patient] = None
    upcoming_appointments: List[Incident] = Field(default_factory=list)
    treatments: TreatmentStats
    total_spent: float = 0


class AppointmentSplit(Base):
    upcoming: List[Incident] = Field(default_factory=list)
    past: List[Incident] = Field(default_factory=list)


class TreatmentHistory(Base):
    treatments: List[Incident] = Field(default_factory=list)
    total_cost: float = 0
    completed_count: int = 0


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now()


def _by_status(incidents: Iterable[Incident], status: Optional[str]) -> List[Incident]:
    if not status:
        return list(incidents)
    return [i for i in incidents if i.status == status]


def _cost_sum(incidents: Iterable[Incident], status: str) -> float:
    return sum(i.cost for i in incidents if i.status == status and i.cost)


def upcoming_appointments(
    incidents: Sequence[Incident],
    now: Optional[datetime] = None,
    limit: Optional[int] = UPCOMING_LIMIT,
) -> List[Incident]:
    """Pending incidents strictly in the future, soonest first."""

    current = _now(now)
    upcoming = sorted(
        (i for i in incidents if i.status == "Pending" and i.appointment_date > current),
        key=lambda i: i.appointment_date,
    )
    return upcoming if limit is None else upcoming[:limit]


def top_patients(
    incidents: Sequence[Incident],
    patients: Sequence[Patient],
    limit: int = TOP_PATIENTS_LIMIT,
) -> List[TopPatient]:
    """Patients with the most incidents; unknown patient ids are dropped."""

    counts = Counter(i.patient_id for i in incidents)
    by_id = {p.id: p for p in patients}
    ranked = [
        TopPatient(patient=by_id[patient_id], count=count)
        for patient_id, count in counts.most_common()
        if patient_id in by_id
    ]
    return ranked[:limit]


def revenue_stats(incidents: Sequence[Incident]) -> RevenueStats:
    return RevenueStats(
        total_revenue=_cost_sum(incidents, "Completed"),
        pending_revenue=_cost_sum(incidents, "Pending"),
    )


def treatment_stats(incidents: Sequence[Incident]) -> TreatmentStats:
    statuses = Counter(i.status for i in incidents)
    return TreatmentStats(
        completed=statuses["Completed"],
        pending=statuses["Pending"],
        cancelled=statuses["Cancelled"],
    )


def admin_dashboard(store: ClinicStore, now: Optional[datetime] = None) -> AdminDashboard:
    patients = store.get_patients()
    incidents = store.get_incidents()
    LOGGER.debug(
        "Building admin dashboard over %d patients, %d incidents",
        len(patients),
        len(incidents),
    )
    return AdminDashboard(
        total_patients=len(patients),
        total_incidents=len(incidents),
        upcoming_appointments=upcoming_appointments(incidents, now),
        top_patients=top_patients(incidents, patients),
        revenue=revenue_stats(incidents),
        treatments=treatment_stats(incidents),
    )


def patient_dashboard(
    store: ClinicStore,
    patient_id: str,
    now: Optional[datetime] = None,
) -> PatientDashboard:
    incidents = store.get_incidents_for_patient(patient_id)
    return PatientDashboard(
        patient=store.get_patient(patient_id),
        upcoming_appointments=upcoming_appointments(incidents, now),
        treatments=treatment_stats(incidents),
        total_spent=_cost_sum(incidents, "Completed"),
    )


def split_appointments(
    incidents: Sequence[Incident],
    now: Optional[datetime] = None,
    status: Optional[str] = None,
) -> AppointmentSplit:
    """Split into upcoming (soonest first) and past (latest first).

    Completed incidents are always past, even when scheduled ahead.
    """

    current = _now(now)
    selected = _by_status(incidents, status)
    past = sorted(
        (i for i in selected if i.appointment_date <= current or i.status == "Completed"),
        key=lambda i: i.appointment_date,
        reverse=True,
    )
    return AppointmentSplit(
        upcoming=upcoming_appointments(selected, current, limit=None),
        past=past,
    )


def treatment_history(
    incidents: Sequence[Incident],
    status: Optional[str] = None,
) -> TreatmentHistory:
    treatments = sorted(
        (
            i
            for i in _by_status(incidents, status)
            if i.treatment or i.cost or i.status == "Completed"
        ),
        key=lambda i: i.appointment_date,
        reverse=True,
    )
    return TreatmentHistory(
        treatments=treatments,
        total_cost=_cost_sum(treatments, "Completed"),
        completed_count=sum(1 for i in treatments if i.status == "Completed"),
    )


def search_patients(patients: Sequence[Patient], term: str = "") -> List[Patient]:
    """Match on name (case-insensitive) or contact (as typed)."""

    if not term:
        return list(patients)
    lowered = term.lower()
    return [p for p in patients if lowered in p.name.lower() or term in p.contact]


def filter_incidents(
    incidents: Sequence[Incident],
    patients: Sequence[Patient],
    term: str = "",
    status: Optional[str] = None,
) -> List[Incident]:
    """Match on title or patient name, then on exact status."""

    selected = list(incidents)
    if term:
        lowered = term.lower()
        names = {p.id: p.name.lower() for p in patients}
        selected = [
            i
            for i in selected
            if lowered in i.title.lower() or lowered in names.get(i.patient_id, "")
        ]
    return _by_status(selected, status)
