"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from water_log.adapters.json_file_store import JsonFileStore
from water_log.adapters.supabase_kv_store import SupabaseKeyValueStore
from water_log.config import Settings
from water_log.services.storage import (
    InMemoryKeyValueStore,
    KeyValueStore,
    TrackerStore,
)
from water_log.services.tracker import TrackerState


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    key_value_store: KeyValueStore
    tracker_store: TrackerStore
    tracker: TrackerState


def build_key_value_store(settings: Settings) -> KeyValueStore:
    """Create the key-value store selected by the settings."""
    if settings.storage_backend == "file":
        return JsonFileStore(settings.data_path)
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStore()
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "Supabase storage requires supabase_url and supabase_service_key"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStore(client, table=settings.supabase_table)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    key_value_store = build_key_value_store(resolved_settings)
    tracker_store = TrackerStore(key_value_store)
    tracker = TrackerState(
        store=tracker_store,
        default_goal=resolved_settings.default_goal_ml,
    )
    return AppContainer(
        settings=resolved_settings,
        key_value_store=key_value_store,
        tracker_store=tracker_store,
        tracker=tracker,
    )
