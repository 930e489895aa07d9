"""User account model."""

from __future__ import annotations

from typing import Literal, Optional

from dental_center.models.base import Base

Role = Literal["Admin", "Patient"]


class User(Base):
    """A login identity; Patient users point at their patient record."""

    id: str
    role: Role
    email: str
    password_hash: str
    patient_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "Admin"

    def owns_patient(self, patient_id: str) -> bool:
        return self.patient_id is not None and self.patient_id == patient_id

    def to_public(self) -> "UserProfile":
        return UserProfile(
            id=self.id,
            role=self.role,
            email=self.email,
            patient_id=self.patient_id,
        )


class UserProfile(Base):
    """User representation safe to hand to clients."""

    id: str
    role: Role
    email: str
    patient_id: Optional[str] = None
