"""Incident (appointment/treatment) endpoints and file attachments."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from dental_center.deps import generate_id, get_current_user, get_store, require_admin
from dental_center.exceptions import InvalidAttachmentError, OrphanedIncidentError
from dental_center.models.incident import Incident, IncidentCreate, IncidentStatus, IncidentUpdate
from dental_center.models.user import User
from dental_center.services.files import (
    AttachmentInfo,
    content_disposition,
    create_file_attachment,
    decode_file_attachment,
    describe_attachment,
)
from dental_center.services.reports import filter_incidents
from dental_center.services.storage import ClinicStore, ensure_patient_exists

LOGGER = logging.getLogger(__name__)

router = APIRouter()


def _get_visible_incident(store: ClinicStore, user: User, incident_id: str) -> Incident:
    incident = store.get_incident(incident_id)
    if incident is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Incident not found")

    if not user.is_admin and not user.owns_patient(incident.patient_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to access this incident",
        )
    return incident


def _check_patient_reference(store: ClinicStore, incident: Incident) -> None:
    try:
        ensure_patient_exists(store, incident.patient_id, incident.id)
    except OrphanedIncidentError as exc:
        LOGGER.warning("Rejected incident %s: %s", incident.id, exc)
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc


@router.get("", response_model=List[Incident])
def list_incidents(
    search: str = Query("", description="Match on title or patient name"),
    status_filter: Optional[IncidentStatus] = Query(None, alias="status"),
    store: ClinicStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> List[Incident]:
    """Admins list every incident; patient users only their own."""

    if user.is_admin:
        incidents = store.get_incidents()
    else:
        incidents = store.get_incidents_for_patient(user.patient_id or "")
    return filter_incidents(incidents, store.get_patients(), search, status_filter)


@router.post("", response_model=Incident, status_code=status.HTTP_201_CREATED)
def create_incident(
    payload: IncidentCreate,
    store: ClinicStore = Depends(get_store),
    _: User = Depends(require_admin),
) -> Incident:
    incident = Incident.model_validate(
        {**payload.model_dump(), "id": payload.id or generate_id("i")}
    )
    _check_patient_reference(store, incident)
    store.add_incident(incident)
    LOGGER.info("Created incident %s for patient %s", incident.id, incident.patient_id)
    return incident


@router.get("/{incident_id}", response_model=Incident)
def get_incident(
    incident_id: str,
    store: ClinicStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Incident:
    return _get_visible_incident(store, user, incident_id)


@router.put("/{incident_id}", response_model=Incident)
def update_incident(
    incident_id: str,
    payload: IncidentUpdate,
    store: ClinicStore = Depends(get_store),
    user: User = Depends(require_admin),
) -> Incident:
    incident = _get_visible_incident(store, user, incident_id)
    try:
        updated = incident.merged(payload.model_dump(exclude_unset=True))
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    if updated.patient_id != incident.patient_id:
        _check_patient_reference(store, updated)

    if not store.update_incident(updated):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Incident not found")
    return updated


@router.delete("/{incident_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_incident(
    incident_id: str,
    store: ClinicStore = Depends(get_store),
    _: User = Depends(require_admin),
) -> None:
    if not store.delete_incident(incident_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Incident not found")


@router.get("/{incident_id}/files", response_model=List[AttachmentInfo])
def list_incident_files(
    incident_id: str,
    store: ClinicStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> List[AttachmentInfo]:
    """Attachment names, kinds and readable sizes, without payloads."""

    incident = _get_visible_incident(store, user, incident_id)
    return [describe_attachment(index, f) for index, f in enumerate(incident.files)]


@router.post(
    "/{incident_id}/files",
    response_model=Incident,
    status_code=status.HTTP_201_CREATED,
)
def upload_incident_file(
    incident_id: str,
    file: UploadFile = File(...),
    store: ClinicStore = Depends(get_store),
    user: User = Depends(require_admin),
) -> Incident:
    """Embed an uploaded file into the incident as a data URL."""

    incident = _get_visible_incident(store, user, incident_id)
    attachment = create_file_attachment(
        file.filename or "attachment",
        file.file.read(),
        file.content_type,
    )
    updated = incident.model_copy(update={"files": [*incident.files, attachment]})
    store.update_incident(updated)
    LOGGER.info(
        "Attached %s (%d bytes) to incident %s",
        attachment.name,
        attachment.size,
        incident_id,
    )
    return updated


@router.get("/{incident_id}/files/{index}")
def download_incident_file(
    incident_id: str,
    index: int,
    store: ClinicStore = Depends(get_store),
    user: User = Depends(get_current_user),
) -> Response:
    incident = _get_visible_incident(store, user, incident_id)
    if not 0 <= index < len(incident.files):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    attachment = incident.files[index]
    try:
        content = decode_file_attachment(attachment)
    except InvalidAttachmentError as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc

    return Response(
        content=content,
        media_type=attachment.type,
        headers={"Content-Disposition": content_disposition(attachment.name)},
    )


@router.delete("/{incident_id}/files/{index}", response_model=Incident)
def delete_incident_file(
    incident_id: str,
    index: int,
    store: ClinicStore = Depends(get_store),
    user: User = Depends(require_admin),
) -> Incident:
    incident = _get_visible_incident(store, user, incident_id)
    if not 0 <= index < len(incident.files):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    files = [f for position, f in enumerate(incident.files) if position != index]
    updated = incident.model_copy(update={"files": files})
    store.update_incident(updated)
    return updated
