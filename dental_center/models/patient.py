"""Patient model."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import Field

from dental_center.models.base import Base


class Patient(Base):
    """Represents a patient registered with the clinic."""

    id: str
    name: str = Field(min_length=1)
    dob: date
    contact: str
    health_info: str = ""


class PatientUpdate(Base):
    """Editable patient fields; omitted fields keep their stored value."""

    name: Optional[str] = Field(default=None, min_length=1)
    dob: Optional[date] = None
    contact: Optional[str] = None
    health_info: Optional[str] = None


class PatientCreate(Base):
    """Inbound payload for a new patient; id is generated when missing."""

    id: Optional[str] = None
    name: str = Field(min_length=1)
    dob: date
    contact: str
    health_info: str = ""
