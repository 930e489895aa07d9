"""FastAPI dependencies: store, session, and role guards."""

import time
from functools import lru_cache

from fastapi import Depends, HTTPException, status

from dental_center.models.user import User
from dental_center.services.auth import AuthSession
from dental_center.services.kv import build_backend
from dental_center.services.storage import ClinicStore
from dental_center.utils.config import get_settings


@lru_cache()
def get_store() -> ClinicStore:
    """Return the process-wide store, seeding it on first use."""

    settings = get_settings()
    store = ClinicStore(
        build_backend(settings),
        key_prefix=settings.storage_key_prefix,
    )
    if settings.seed_on_startup:
        store.initialize()
    return store


def get_auth_session(store: ClinicStore = Depends(get_store)) -> AuthSession:
    return AuthSession(store)


def get_current_user(session: AuthSession = Depends(get_auth_session)) -> User:
    if session.current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return session.current_user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return user


def require_patient(user: User = Depends(get_current_user)) -> User:
    if user.patient_id is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Patient account required",
        )
    return user


def generate_id(prefix: str) -> str:
    """Prefix plus epoch milliseconds, e.g. ``p1736935200000``."""

    return f"{prefix}{int(time.time() * 1000)}"
