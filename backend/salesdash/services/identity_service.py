# Overview: Identity store; user accounts, first-run seeding, login and the session record.

"""
Identity Store

Users are held in memory for the lifetime of the application and written
back as one snapshot after every change.

SECURITY NOTES:
- Passwords are stored and compared in plaintext, case-sensitive, exactly
  as entered. Nothing is hashed.
- Username uniqueness is enforced at registration, which is what keeps
  authenticate() unambiguous.
- There is one session record: the last successful login or registration.
"""

from __future__ import annotations

import logging

from ..models import User, ROLE_ADMIN, ROLE_USER
from ..models.records import new_id
from ..validation import DashboardError, InvalidInput
from .storage_service import KeyValueStore


logger = logging.getLogger(__name__)

DEFAULT_USERS_KEY = "dashboard_users"
DEFAULT_SESSION_KEY = "dashboard_auth"


class InvalidCredentials(DashboardError):
    """Raised when no account matches the username/password pair."""
    status_code = 401


class DuplicateUsername(DashboardError):
    """Raised when registering a username that already exists."""
    status_code = 409


class IdentityStore:
    def __init__(
        self,
        store: KeyValueStore,
        *,
        users_key: str = DEFAULT_USERS_KEY,
        session_key: str = DEFAULT_SESSION_KEY,
        default_admin: tuple[str, str] = ("admin", "admin123"),
        default_user: tuple[str, str] = ("user", "user123"),
    ):
        self.store = store
        self.users_key = users_key
        self.session_key = session_key
        self.default_admin = default_admin
        self.default_user = default_user
        self._users: list[User] = []

    def initialize(self) -> list[User]:
        """
        Load the persisted users, seeding two accounts on first run.

        Existing collections are loaded unchanged.
        """
        raw = self.store.get_json(self.users_key)
        if raw is None:
            admin_name, admin_password = self.default_admin
            user_name, user_password = self.default_user
            self._users = [
                User(id="admin-1", username=admin_name, password=admin_password, role=ROLE_ADMIN),
                User(id="user-1", username=user_name, password=user_password, role=ROLE_USER),
            ]
            self._save()
            logger.info("Seeded default accounts %r and %r", admin_name, user_name)
        else:
            self._users = [User.from_dict(item) for item in raw]
        return list(self._users)

    def _save(self) -> None:
        self.store.set_json(self.users_key, [user.to_dict() for user in self._users])

    def _start_session(self, user: User) -> None:
        self.store.set_json(self.session_key, {"user": user.to_dict(), "isAuthenticated": True})

    def users(self) -> list[User]:
        return list(self._users)

    def regular_users(self) -> list[User]:
        return [user for user in self._users if user.role == ROLE_USER]

    def find_user(self, user_id: str) -> User | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def authenticate(self, username: str, password: str) -> User | None:
        """
        Return the user whose username and password both match exactly.

        On success the session record is written. Returns None otherwise.
        """
        for user in self._users:
            if user.username == username and user.password == password:
                self._start_session(user)
                logger.info("User %r logged in", username)
                return user
        return None

    def register(self, username: str, password: str, role: str = ROLE_USER) -> User:
        """
        Create an account and log it in.

        Raises DuplicateUsername if the username is taken (the collection is
        left untouched) and InvalidInput for an empty username/password or an
        unknown role.
        """
        if any(user.username == username for user in self._users):
            raise DuplicateUsername("Username already exists", details={"username": username})

        user = User(id=new_id("user"), username=username, password=password, role=role)
        self._users.append(user)
        self._save()
        self._start_session(user)
        logger.info("Registered %r with role %s", username, role)
        return user

    def end_session(self) -> None:
        """Clear the session record; users are not touched."""
        self.store.remove(self.session_key)

    def current_session(self) -> dict | None:
        return self.store.get_json(self.session_key)

    def current_user(self) -> User | None:
        """
        The logged-in user, re-read from the session record.

        A record that no longer parses as a user is treated as logged out.
        """
        session = self.current_session()
        if not session or not session.get("isAuthenticated"):
            return None
        try:
            return User.from_dict(session.get("user") or {})
        except InvalidInput:
            logger.warning("Discarding malformed session record")
            return None


def require_credentials(username: str | None, password: str | None) -> tuple[str, str]:
    """Both fields are needed before a login or registration is attempted."""
    if not username or not password:
        raise InvalidInput("username and password required")
    return username, password
