"""Persisted clinic store: collections, auth flags, and CRUD over them."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, List, Optional, Sequence, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

from dental_center.exceptions import OrphanedIncidentError
from dental_center.models.base import Base
from dental_center.models.incident import Incident
from dental_center.models.patient import Patient
from dental_center.models.state import AppState
from dental_center.models.user import User
from dental_center.services.kv import KeyValueBackend
from dental_center.services.seed import seed_incidents, seed_patients, seed_users

LOGGER = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "dental_"

USERS_KEY = "users"
PATIENTS_KEY = "patients"
INCIDENTS_KEY = "incidents"
CURRENT_USER_KEY = "current_user"
IS_AUTHENTICATED_KEY = "is_authenticated"

RecordT = TypeVar("RecordT", bound=Base)


class ClinicStore:
    """Whole-collection store over an injected key-value backend.

    Every mutation reads the full collection, transforms it in memory and
    writes it back. There is no locking; concurrent writers race and the
    last write wins.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self.backend = backend
        self.key_prefix = key_prefix

    def key(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    # ------------------------------------------------------------------
    # Seeding
    # ------------------------------------------------------------------
    def initialize(self) -> None:
        """Write seed data for every collection missing from storage."""

        seeders: List[tuple[str, Callable[[], Sequence[Base]]]] = [
            (USERS_KEY, seed_users),
            (PATIENTS_KEY, seed_patients),
            (INCIDENTS_KEY, seed_incidents),
        ]
        for name, seeder in seeders:
            if self.backend.get(self.key(name)):
                continue
            records = seeder()
            self._write_collection(name, records)
            LOGGER.info("Seeded %s with %d records", self.key(name), len(records))

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------
    def get_users(self) -> List[User]:
        return self._read_collection(USERS_KEY, User)

    def get_patients(self) -> List[Patient]:
        return self._read_collection(PATIENTS_KEY, Patient)

    def get_incidents(self) -> List[Incident]:
        return self._read_collection(INCIDENTS_KEY, Incident)

    def set_users(self, users: Sequence[User]) -> None:
        self._write_collection(USERS_KEY, users)

    def set_patients(self, patients: Sequence[Patient]) -> None:
        self._write_collection(PATIENTS_KEY, patients)

    def set_incidents(self, incidents: Sequence[Incident]) -> None:
        self._write_collection(INCIDENTS_KEY, incidents)

    def get_patient(self, patient_id: str) -> Optional[Patient]:
        return next((p for p in self.get_patients() if p.id == patient_id), None)

    def get_incident(self, incident_id: str) -> Optional[Incident]:
        return next((i for i in self.get_incidents() if i.id == incident_id), None)

    def get_incidents_for_patient(self, patient_id: str) -> List[Incident]:
        return [i for i in self.get_incidents() if i.patient_id == patient_id]

    # ------------------------------------------------------------------
    # Auth flags
    # ------------------------------------------------------------------
    def get_current_user(self) -> Optional[User]:
        raw_user = self.backend.get(self.key(CURRENT_USER_KEY))
        if not raw_user:
            return None

        try:
            return User.model_validate_json(raw_user)
        except ValidationError:
            LOGGER.warning(
                "Stored current user under %s is invalid; treating as absent",
                self.key(CURRENT_USER_KEY),
            )
            return None

    def set_current_user(self, user: Optional[User]) -> None:
        """Persist the current user; None clears it and the auth flag."""

        if user is None:
            self.clear_auth_data()
            return

        self.backend.set(self.key(CURRENT_USER_KEY), json.dumps(user.to_storage()))
        self.backend.set(self.key(IS_AUTHENTICATED_KEY), "true")

    def is_authenticated(self) -> bool:
        return self.backend.get(self.key(IS_AUTHENTICATED_KEY)) == "true"

    def clear_auth_data(self) -> None:
        self.backend.delete(self.key(CURRENT_USER_KEY))
        self.backend.set(self.key(IS_AUTHENTICATED_KEY), "false")

    def get_app_state(self) -> AppState:
        return AppState(
            users=self.get_users(),
            patients=self.get_patients(),
            incidents=self.get_incidents(),
            current_user=self.get_current_user(),
            is_authenticated=self.is_authenticated(),
        )

    # ------------------------------------------------------------------
    # Patient CRUD
    # ------------------------------------------------------------------
    def add_patient(self, patient: Patient) -> None:
        patients = self.get_patients()
        patients.append(patient)
        self.set_patients(patients)
        LOGGER.debug("Added patient %s", patient.id)

    def update_patient(self, patient: Patient) -> bool:
        """Replace the patient with the same id; no-op when it is unknown."""

        patients = self.get_patients()
        index = _index_of(patients, patient.id)
        if index is None:
            LOGGER.debug("Patient %s not found; update skipped", patient.id)
            return False

        patients[index] = patient
        self.set_patients(patients)
        return True

    def delete_patient(self, patient_id: str) -> bool:
        """Remove a patient and every incident that references it."""

        patients = self.get_patients()
        remaining = [p for p in patients if p.id != patient_id]
        self.set_patients(remaining)

        incidents = self.get_incidents()
        kept_incidents = [i for i in incidents if i.patient_id != patient_id]
        self.set_incidents(kept_incidents)

        removed = len(patients) - len(remaining)
        LOGGER.info(
            "Deleted patient %s (matched=%d) and %d incidents",
            patient_id,
            removed,
            len(incidents) - len(kept_incidents),
        )

        linked = [u.email for u in self.get_users() if u.patient_id == patient_id]
        if removed and linked:
            LOGGER.warning(
                "Users %s still link to deleted patient %s",
                ", ".join(linked),
                patient_id,
            )
        return removed > 0

    # ------------------------------------------------------------------
    # Incident CRUD
    # ------------------------------------------------------------------
    def add_incident(self, incident: Incident) -> None:
        incidents = self.get_incidents()
        incidents.append(incident)
        self.set_incidents(incidents)
        LOGGER.debug("Added incident %s for patient %s", incident.id, incident.patient_id)

    def update_incident(self, incident: Incident) -> bool:
        incidents = self.get_incidents()
        index = _index_of(incidents, incident.id)
        if index is None:
            LOGGER.debug("Incident %s not found; update skipped", incident.id)
            return False

        incidents[index] = incident
        self.set_incidents(incidents)
        return True

    def delete_incident(self, incident_id: str) -> bool:
        incidents = self.get_incidents()
        remaining = [i for i in incidents if i.id != incident_id]
        self.set_incidents(remaining)
        return len(remaining) < len(incidents)

    def find_orphaned_incidents(self) -> List[Incident]:
        """Return incidents whose patient no longer exists."""

        patient_ids = {p.id for p in self.get_patients()}
        return [i for i in self.get_incidents() if i.patient_id not in patient_ids]

    def find_unlinked_patient_users(self) -> List[User]:
        """Return patient users whose patient record no longer exists."""

        patient_ids = {p.id for p in self.get_patients()}
        return [
            u
            for u in self.get_users()
            if u.role == "Patient" and u.patient_id not in patient_ids
        ]

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def _read_collection(self, name: str, model: Type[RecordT]) -> List[RecordT]:
        key = self.key(name)
        raw_value = self.backend.get(key)
        if not raw_value:
            return []

        try:
            payload: Any = json.loads(raw_value)
        except json.JSONDecodeError:
            LOGGER.warning("Collection %s payload invalid JSON; using empty", key)
            return []

        try:
            return TypeAdapter(List[model]).validate_python(payload)
        except ValidationError as exc:
            LOGGER.warning(
                "Collection %s failed validation; using empty. error=%s",
                key,
                exc,
            )
            return []

    def _write_collection(self, name: str, records: Sequence[Base]) -> None:
        payload = [record.to_storage() for record in records]
        self.backend.set(self.key(name), json.dumps(payload, ensure_ascii=False))


def ensure_patient_exists(
    store: ClinicStore,
    patient_id: str,
    incident_id: Optional[str] = None,
) -> Patient:
    """Return the referenced patient or raise OrphanedIncidentError."""

    patient = store.get_patient(patient_id)
    if patient is None:
        raise OrphanedIncidentError(patient_id, incident_id)
    return patient


def _index_of(records: Sequence[Any], record_id: str) -> Optional[int]:
    for index, record in enumerate(records):
        if record.id == record_id:
            return index
    return None
