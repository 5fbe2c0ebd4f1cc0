from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class KeyValueEntry(SQLModel, table=True):
    """
    One persisted key of the storefront.

    The value is JSON-encoded text owned by a repository
    (product list, order list, user list, current session, wishlist).
    """

    __tablename__ = "kv_entries"

    key: str = Field(
        primary_key=True,
        max_length=255,
        description="Storage key, e.g. 'stylehive_orders'",
    )

    value: str = Field(
        description="JSON-encoded payload",
    )

    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last write timestamp (UTC)",
    )
