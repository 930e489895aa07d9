"""Incident (appointment/treatment) and attachment models."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from dental_center.models.base import Base

IncidentStatus = Literal["Pending", "Completed", "Cancelled"]
INCIDENT_STATUSES = ("Pending", "Completed", "Cancelled")


def _as_local_naive(value: Optional[datetime]) -> Optional[datetime]:
    """Appointment times are stored as naive local time."""

    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


class FileAttachment(Base):
    """A file embedded inline in its incident as a data URL."""

    name: str
    url: str
    type: str
    size: int = Field(ge=0)


class Incident(Base):
    """A single appointment/treatment record tied to one patient."""

    id: str
    patient_id: str
    title: str = Field(min_length=1)
    description: str = ""
    comments: str = ""
    appointment_date: datetime
    cost: Optional[float] = Field(default=None, ge=0)
    status: IncidentStatus = "Pending"
    treatment: Optional[str] = None
    next_date: Optional[datetime] = None
    files: List[FileAttachment] = Field(default_factory=list)

    @field_validator("appointment_date", "next_date")
    @classmethod
    def normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_local_naive(value)


class IncidentCreate(Base):
    """Inbound payload for a new incident; id is generated when missing."""

    id: Optional[str] = None
    patient_id: str
    title: str = Field(min_length=1)
    description: str = ""
    comments: str = ""
    appointment_date: datetime
    cost: Optional[float] = Field(default=None, ge=0)
    status: IncidentStatus = "Pending"
    treatment: Optional[str] = None
    next_date: Optional[datetime] = None
    files: List[FileAttachment] = Field(default_factory=list)


class IncidentUpdate(Base):
    """Partial incident edit; explicitly sent nulls clear optional fields."""

    patient_id: Optional[str] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    comments: Optional[str] = None
    appointment_date: Optional[datetime] = None
    cost: Optional[float] = Field(default=None, ge=0)
    status: Optional[IncidentStatus] = None
    treatment: Optional[str] = None
    next_date: Optional[datetime] = None
    files: Optional[List[FileAttachment]] = None
