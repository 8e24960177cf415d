"""Remote storage of the system document in a single Supabase row."""

from __future__ import annotations

from typing import Any

from supabase import Client

from ..config import settings
from ..db.supabase import get_supabase_client


class SupabaseDocumentStore:
    """Reads and writes the whole system document as one row keyed by a fixed id."""

    def __init__(
        self,
        client: Client | None = None,
        table: str | None = None,
        document_id: str | None = None,
    ) -> None:
        self._client = client
        self.table = table or settings.supabase_table
        self.document_id = document_id or settings.document_id

    @property
    def client(self) -> Client:
        client = self._client or get_supabase_client()
        if client is None:
            raise ConnectionError(
                "Supabase not configured. Set STOREHUB_SUPABASE_URL and STOREHUB_SUPABASE_KEY environment variables."
            )
        return client

    def load(self) -> Any:
        """Return the stored document, or an empty document when the row does not exist yet."""
        response = (
            self.client.table(self.table)
            .select("data")
            .eq("id", self.document_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        if not rows:
            return {"jobs": [], "customers": []}
        return rows[0].get("data")

    def save(self, payload: dict[str, Any]) -> None:
        # updated_at is stamped by the database trigger, not by the client clock.
        self.client.table(self.table).upsert({"id": self.document_id, "data": payload}).execute()

    def last_updated(self) -> str | None:
        response = (
            self.client.table(self.table)
            .select("updated_at")
            .eq("id", self.document_id)
            .limit(1)
            .execute()
        )
        rows = response.data or []
        return rows[0].get("updated_at") if rows else None
