"""Patient management endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from dental_center.deps import generate_id, get_current_user, get_store, require_admin
from dental_center.models.patient import Patient, PatientCreate, PatientUpdate
from dental_center.models.user import User
from dental_center.services.reports import search_patients
from dental_center.services.storage import ClinicStore

LOGGER = logging.getLogger(__name__)

router = APIRouter()


def _get_visible_patient(store: ClinicStore, user: User, patient_id: str) -> Patient:
    """Admins see every patient; patient users only their own record."""

    if not user.is_admin and not user.owns_patient(patient_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to access this patient",
        )

    patient = store.get_patient(patient_id)
    if patient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    return patient


@router.get("", response_model=List[Patient])
def list_patients(
    search: str = Query("", description="Match on name or contact"),
    store: ClinicStore = Depends(get_store),
    _: User = Depends(require_admin),
) -> List[Patient]:
    return search_patients(store.get_patients(), search)


@router.post("", response_model=Patient, status_code=status.HTTP_201_CREATED)
def create_patient(
    payload: PatientCreate,
    store: ClinicStore = Depends(get_store),
    _: User = Depends(require_admin),
) -> Patient:
    """Register a new patient; the id is generated when not supplied."""

    patient = Patient.model_validate(
        {**payload.model_dump(), "id": payload.id or generate_id("p")}
    )
    store.add_patient(patient)
    LOGGER.info("Created patient %s", patient.id)
    return patient


@router.get("/{patient_id}", response_model=Patient)
def get_patient(
    patient_id: str,
    store: ClinicStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Patient:
    return _get_visible_patient(store, user, patient_id)


@router.put("/{patient_id}", response_model=Patient)
def update_patient(
    patient_id: str,
    payload: PatientUpdate,
    store: ClinicStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Patient:
    """Edit patient fields; patient users may edit their own profile."""

    patient = _get_visible_patient(store, user, patient_id)
    try:
        updated = patient.merged(payload.model_dump(exclude_unset=True))
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    if not store.update_patient(updated):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    return updated


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_patient(
    patient_id: str,
    store: ClinicStore = Depends(get_store),
    _: User = Depends(require_admin),
) -> None:
    """Delete a patient together with all of their incidents."""

    if not store.delete_patient(patient_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
