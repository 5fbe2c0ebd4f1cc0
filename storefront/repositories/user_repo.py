import logging

from pydantic import ValidationError

from storefront.core.storage import (
    CURRENT_USER,
    USERS,
    KeyValueStorage,
    dump_json,
    load_json,
    storage_key,
)
from storefront.models.user import SessionUser, StoredUser

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Data access layer for registered users and the current session.

    Responsibilities:
      - Pure storage operations
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Registered users -----

    def list(self, storage: KeyValueStorage) -> list[StoredUser]:
        """Return every stored account (malformed rows are skipped)."""
        users: list[StoredUser] = []
        for row in self._rows(storage):
            try:
                users.append(StoredUser.model_validate(row))
            except ValidationError:
                logger.warning("Skipping malformed user record")
        return users

    def get_by_email(self, storage: KeyValueStorage, email: str) -> StoredUser | None:
        """Case-insensitive lookup by email."""
        wanted = email.lower()
        for user in self.list(storage):
            if user.email.lower() == wanted:
                return user
        return None

    def create(self, storage: KeyValueStorage, user: StoredUser) -> StoredUser:
        """Append a new account, keeping any rows that fail validation."""
        rows = self._rows(storage)
        rows.append(user.model_dump(mode="json"))
        dump_json(storage, storage_key(USERS), rows)
        return user

    def _rows(self, storage: KeyValueStorage):
        raw = load_json(storage, storage_key(USERS))
        return raw if isinstance(raw, list) else []

    # ----- Current session -----

    def get_session(self, storage: KeyValueStorage) -> SessionUser | None:
        raw = load_json(storage, storage_key(CURRENT_USER))
        if not isinstance(raw, dict):
            return None
        try:
            return SessionUser.model_validate(raw)
        except ValidationError:
            logger.warning("Ignoring malformed session record")
            return None

    def set_session(self, storage: KeyValueStorage, user: SessionUser) -> SessionUser:
        """Overwrite the single current session."""
        dump_json(storage, storage_key(CURRENT_USER), user.model_dump(mode="json"))
        return user

    def clear_session(self, storage: KeyValueStorage) -> None:
        storage.delete(storage_key(CURRENT_USER))
