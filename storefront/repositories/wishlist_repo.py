from storefront.core.storage import (
    WISHLIST,
    KeyValueStorage,
    dump_json,
    load_json,
    storage_key,
)


class WishlistRepository:
    """Persisted list of wished product ids (insertion order)."""

    def list_ids(self, storage: KeyValueStorage) -> list[int]:
        raw = load_json(storage, storage_key(WISHLIST))
        if not isinstance(raw, list):
            return []
        return [i for i in raw if isinstance(i, int) and not isinstance(i, bool)]

    def save_ids(self, storage: KeyValueStorage, ids: list[int]) -> None:
        dump_json(storage, storage_key(WISHLIST), ids)
