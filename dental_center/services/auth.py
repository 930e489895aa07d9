"""Login session backed by the store's current-user and auth flags."""

from __future__ import annotations

import logging
from typing import Optional

from dental_center.models.user import User
from dental_center.services.security import verify_password
from dental_center.services.storage import ClinicStore

LOGGER = logging.getLogger(__name__)


class AuthSession:
    """Two-state session: logged out, or logged in as exactly one user.

    Constructing a session rehydrates it from the store. A stored user
    without the auth flag (or the flag without a user) counts as logged
    out, and the persisted pair is reset so both agree again.
    """

    def __init__(self, store: ClinicStore) -> None:
        self.store = store
        self._current_user: Optional[User] = None
        self.rehydrate()

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    @property
    def is_authenticated(self) -> bool:
        return self._current_user is not None

    def rehydrate(self) -> Optional[User]:
        """Reload session state from persisted flags."""

        user = self.store.get_current_user()
        authenticated = self.store.is_authenticated()

        if user is not None and authenticated:
            self._current_user = user
            return user

        if user is not None or authenticated:
            LOGGER.warning(
                "Persisted session disagrees (user=%s authenticated=%s); logging out",
                user.id if user else None,
                authenticated,
            )
            self.store.clear_auth_data()

        self._current_user = None
        return None

    def login(self, email: str, password: str) -> bool:
        """Log in when some user has exactly this email and password."""

        for user in self.store.get_users():
            if user.email != email:
                continue
            try:
                matched = verify_password(password, user.password_hash)
            except ValueError as exc:
                LOGGER.error("Stored credential for user %s unreadable: %s", user.id, exc)
                continue
            if matched:
                self.store.set_current_user(user)
                self._current_user = user
                LOGGER.info("User %s logged in as %s", user.id, user.role)
                return True

        LOGGER.info("Login failed for %s", email)
        return False

    def logout(self) -> None:
        if self._current_user is not None:
            LOGGER.info("User %s logged out", self._current_user.id)
        self.store.clear_auth_data()
        self._current_user = None
