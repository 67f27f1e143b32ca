"""Login session.

Explicit session object handed to the screens that need role
information. ``load()`` restores a previous login from durable storage
at startup and ``clear()`` ends it on logout.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from config.constants import ROLE_KEY, ROLES, SCREENS_BY_ROLE, USER_KEY
from domain.exceptions import StorageError, UnknownRoleError
from infrastructure.session.storage import KeyValueStorage


class Session:
    """Role and user of whoever is logged in."""

    def __init__(self, storage: KeyValueStorage, users: List[Dict[str, Any]]) -> None:
        """Initialize session.

        Args:
            storage: Durable key-value storage for the role/user flags
            users: Known accounts (``nameUser``, ``password``, ``role``)
        """
        self._storage = storage
        self._users = users
        self._role: Optional[str] = None
        self._user: Optional[Dict[str, Any]] = None

    def load(self) -> None:
        """Restore role and user saved by a previous login.

        Unreadable storage is reset and the session starts logged out.
        """
        try:
            role = self._storage.get(ROLE_KEY)
            raw_user = self._storage.get(USER_KEY)
        except StorageError as exc:
            logging.error("Discarding unreadable session storage: %s", exc)
            self._storage.clear()
            role, raw_user = None, None
        self._role = role
        self._user = None
        if raw_user:
            try:
                self._user = json.loads(raw_user)
            except json.JSONDecodeError:
                logging.error("Discarding unreadable stored user")
                self._storage.remove(USER_KEY)

    def login(self, username: str, password: str) -> bool:
        """Check credentials and persist role/user on success."""
        user = next(
            (
                u
                for u in self._users
                if u.get("nameUser") == username and u.get("password") == password
            ),
            None,
        )
        if user is None:
            logging.info("Login rejected for %r", username)
            return False
        self._storage.set(ROLE_KEY, user["role"])
        self._storage.set(USER_KEY, json.dumps(user, ensure_ascii=False))
        self._role = user["role"]
        self._user = dict(user)
        logging.info("Login ok user=%s role=%s", username, self._role)
        return True

    def current_role(self) -> Optional[str]:
        return self._role

    def current_user(self) -> Optional[Dict[str, Any]]:
        return dict(self._user) if self._user is not None else None

    def set_role(self, role: str) -> None:
        """Change the active role, keeping the stored user in sync."""
        if role not in ROLES:
            raise UnknownRoleError(f"Unknown role: {role}")
        self._storage.set(ROLE_KEY, role)
        self._role = role
        if self._user is not None:
            self._user = {**self._user, "role": role}
            self._storage.set(USER_KEY, json.dumps(self._user, ensure_ascii=False))

    def clear(self) -> None:
        """Log out: forget role and user, in memory and in storage."""
        self._storage.remove(ROLE_KEY)
        self._storage.remove(USER_KEY)
        self._role = None
        self._user = None

    def can_access(self, screen: str) -> bool:
        if self._role is None:
            return False
        return screen in SCREENS_BY_ROLE.get(self._role, ())

    def allowed_screens(self) -> tuple[str, ...]:
        if self._role is None:
            return ()
        return tuple(SCREENS_BY_ROLE.get(self._role, ()))
