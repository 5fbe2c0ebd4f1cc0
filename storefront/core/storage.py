import json
import logging
from datetime import datetime, timezone
from typing import Any, Protocol

from pydantic_core import to_jsonable_python
from sqlmodel import Session

from storefront.core.config import get_settings
from storefront.models.storage import KeyValueEntry

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """
    Persistence port of the storefront.

    Every store (catalog, orders, users, session, wishlist) is a single
    key holding JSON text. Writes are whole-value overwrites; there is
    no compare-and-swap, so two processes writing the same key race
    (last write wins).
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SqlKeyValueStorage:
    """
    KeyValueStorage backed by the `kv_entries` table.

    Usage:

        with Session(engine) as session:
            storage = SqlKeyValueStorage(session)
            storage.set("stylehive_orders", "[]")
    """

    def __init__(self, session: Session):
        self.session = session

    def get(self, key: str) -> str | None:
        entry = self.session.get(KeyValueEntry, key)
        return entry.value if entry else None

    def set(self, key: str, value: str) -> None:
        entry = self.session.get(KeyValueEntry, key)
        if entry is None:
            entry = KeyValueEntry(key=key, value=value)
        else:
            entry.value = value
            entry.updated_at = datetime.now(timezone.utc)
        self.session.add(entry)
        self.session.commit()

    def delete(self, key: str) -> None:
        entry = self.session.get(KeyValueEntry, key)
        if entry is not None:
            self.session.delete(entry)
            self.session.commit()


class InMemoryStorage:
    """Dict-backed KeyValueStorage (tests, throwaway demos)."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def storage_key(name: str) -> str:
    """
    Build a persisted key from the configured prefix.

        storage_key("orders") -> "stylehive_orders"
    """
    return f"{get_settings().STORAGE_KEY_PREFIX}_{name}"


PRODUCTS = "products"
ORDERS = "orders"
USERS = "users"
CURRENT_USER = "user"
WISHLIST = "wishlist"


def load_json(storage: KeyValueStorage, key: str) -> Any:
    """
    Read and decode one key.

    Returns None when the key is absent or holds malformed JSON
    (logged, treated as absent).
    """
    raw = storage.get(key)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed JSON stored under %r", key)
        return None


def dump_json(storage: KeyValueStorage, key: str, value: Any) -> None:
    """Encode `value` (models allowed) and overwrite the key."""
    storage.set(key, json.dumps(to_jsonable_python(value)))
