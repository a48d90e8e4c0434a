"""
Key-value store backed by the Supabase ``kv_store`` table.

Small per-user documents (quest progress, wardrobe, claimed rewards) live
here as JSON values under namespaced keys such as ``quests:<user_id>``.
"""

from typing import Any

from supabase import Client


class KVStore:
    """JSON values addressed by string keys."""

    table = "kv_store"

    def __init__(self, client: Client) -> None:
        self.client = client

    async def get(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None."""
        response = self.client.table(self.table).select("value").eq("key", key).execute()

        if not response.data:
            return None

        return response.data[0]["value"]

    async def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        response = (
            self.client.table(self.table)
            .upsert({"key": key, "value": value}, on_conflict="key")
            .execute()
        )

        if not response.data:
            raise Exception(f"Failed to store {key}")

    async def delete(self, key: str) -> None:
        """Remove ``key``."""
        self.client.table(self.table).delete().eq("key", key).execute()

    async def get_by_prefix(self, prefix: str) -> list[Any]:
        """Return every value whose key starts with ``prefix``."""
        response = (
            self.client.table(self.table).select("key, value").like("key", f"{prefix}%").execute()
        )

        return [row["value"] for row in response.data]
