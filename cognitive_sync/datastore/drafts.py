"""Draft persistence for instruction documents.

Drafts live in the ``instructions`` table:
``id`` (text, primary key), ``title``, ``summary``, ``document`` (jsonb),
``status`` (``draft`` or ``published``), ``updated_at`` (timestamptz).
"""

import json
import logging
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ValidationError
from supabase import Client

from cognitive_sync.datastore.client import get_datastore_client
from cognitive_sync.models.preview import PreviewDocument

logger = logging.getLogger(__name__)

TABLE_NAME = "instructions"


class DraftStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class DraftSummary(BaseModel):
    """Row shown on the dashboard."""

    id: str
    title: str
    summary: str = ""
    status: DraftStatus = DraftStatus.DRAFT
    updated_at: datetime | None = None


class DataStoreError(Exception):
    """Raised when the data store rejects or fails a request."""


class DraftRepository:
    """Reads and writes instruction drafts through the Supabase client."""

    def __init__(self, client: Client | None = None) -> None:
        if client is None:
            try:
                client = get_datastore_client()
            except Exception as e:
                logger.error(f"Failed to create data store client: {e}")
                raise DataStoreError("Data store is not available") from e
        self._client = client

    def save(
        self,
        draft_id: str,
        document: PreviewDocument,
        status: DraftStatus = DraftStatus.DRAFT,
    ) -> DraftSummary:
        """Insert or update a draft.

        Raises:
            DataStoreError: If the request fails.
        """
        row = {
            "id": draft_id,
            "title": document.title,
            "summary": document.summary,
            "document": document.model_dump(mode="json"),
            "status": status.value,
            "updated_at": datetime.now(UTC).isoformat(),
        }
        try:
            self._client.table(TABLE_NAME).upsert(row).execute()
        except Exception as e:
            logger.error(f"Failed to save draft {draft_id}: {e}")
            raise DataStoreError("Failed to save draft") from e

        logger.info(f"Saved draft {draft_id} ({status.value})")
        return DraftSummary.model_validate(row)

    def list_recent(self, limit: int = 20) -> list[DraftSummary]:
        """Return the most recently updated drafts, newest first.

        Raises:
            DataStoreError: If the request fails.
        """
        try:
            response = (
                self._client.table(TABLE_NAME)
                .select("id, title, summary, status, updated_at")
                .order("updated_at", desc=True)
                .limit(limit)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list drafts: {e}")
            raise DataStoreError("Failed to load drafts") from e

        return [DraftSummary.model_validate(row) for row in response.data or []]

    def get(self, draft_id: str) -> PreviewDocument | None:
        """Load the saved document for a draft.

        Returns:
            The stored PreviewDocument, or None if the draft does not exist
            or its stored document no longer validates.

        Raises:
            DataStoreError: If the request fails.
        """
        try:
            response = (
                self._client.table(TABLE_NAME)
                .select("document")
                .eq("id", draft_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to load draft {draft_id}: {e}")
            raise DataStoreError("Failed to load draft") from e

        rows = response.data or []
        if not rows or not rows[0].get("document"):
            return None
        try:
            return PreviewDocument.model_validate_json(json.dumps(rows[0]["document"]))
        except ValidationError as e:
            logger.warning(f"Stored document for draft {draft_id} is invalid: {e}")
            return None
