"""Dashboard, calendar, and patient self-service views."""

from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query

from dental_center.deps import get_current_user, get_store, require_admin, require_patient
from dental_center.models.incident import IncidentStatus
from dental_center.models.user import User
from dental_center.services.reports import (
    AdminDashboard,
    AppointmentSplit,
    PatientDashboard,
    TreatmentHistory,
    admin_dashboard,
    patient_dashboard,
    split_appointments,
    treatment_history,
)
from dental_center.services.schedule import CalendarMonth, month_calendar
from dental_center.services.storage import ClinicStore

router = APIRouter()


@router.get("/dashboard", response_model=Union[AdminDashboard, PatientDashboard])
def dashboard(
    store: ClinicStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Union[AdminDashboard, PatientDashboard]:
    """Return clinic-wide figures for admins, personal ones for patients."""

    if user.is_admin:
        return admin_dashboard(store)
    return patient_dashboard(store, user.patient_id or "")


@router.get("/calendar", response_model=CalendarMonth)
def calendar_month(
    year: Optional[int] = Query(None, ge=MINYEAR, le=MAXYEAR),
    month: Optional[int] = Query(None, ge=1, le=12),
    store: ClinicStore = Depends(get_store),
    _: User = Depends(require_admin),
) -> CalendarMonth:
    """Month grid of appointments; defaults to the current month."""

    today = date.today()
    return month_calendar(
        store.get_incidents(),
        year or today.year,
        month or today.month,
    )


@router.get("/me/appointments", response_model=AppointmentSplit)
def my_appointments(
    status_filter: Optional[IncidentStatus] = Query(None, alias="status"),
    store: ClinicStore = Depends(get_store),
    user: User = Depends(require_patient),
) -> AppointmentSplit:
    incidents = store.get_incidents_for_patient(user.patient_id)
    return split_appointments(incidents, status=status_filter)


@router.get("/me/treatments", response_model=TreatmentHistory)
def my_treatments(
    status_filter: Optional[IncidentStatus] = Query(None, alias="status"),
    store: ClinicStore = Depends(get_store),
    user: User = Depends(require_patient),
) -> TreatmentHistory:
    incidents = store.get_incidents_for_patient(user.patient_id)
    return treatment_history(incidents, status=status_filter)
