"""Whole-application snapshot model."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from dental_center.models.base import Base
from dental_center.models.incident import Incident
from dental_center.models.patient import Patient
from dental_center.models.user import User


class AppState(Base):
    users: List[User] = Field(default_factory=list)
    patients: List[Patient] = Field(default_factory=list)
    incidents: List[Incident] = Field(default_factory=list)
    current_user: Optional[User] = None
    is_authenticated: bool = False
