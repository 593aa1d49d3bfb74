"""Supabase-backed persistence for instruction drafts."""

from cognitive_sync.datastore.client import (
    DataStoreConfig,
    get_datastore_client,
    get_datastore_config,
)
from cognitive_sync.datastore.drafts import (
    DataStoreError,
    DraftRepository,
    DraftStatus,
    DraftSummary,
)

__all__ = [
    "DataStoreConfig",
    "DataStoreError",
    "DraftRepository",
    "DraftStatus",
    "DraftSummary",
    "get_datastore_client",
    "get_datastore_config",
]
