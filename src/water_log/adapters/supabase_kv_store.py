"""Supabase-backed key-value store."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from water_log.services.storage import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing one row per key."""

    client: Client
    table: str = "app_storage"

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError):
            _logger.exception("Failed to read %s from Supabase", key)
            return None
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> bool:
        """Upsert a value; API and network errors are logged and reported as False."""
        try:
            self.client.table(self.table).upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="key",
            ).execute()
        except (APIError, httpx.HTTPError):
            _logger.exception("Failed to write %s to Supabase", key)
            return False
        return True
