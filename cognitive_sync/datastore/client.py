"""Supabase client configuration.

The data store backs draft persistence only; the chat path never touches it.
Missing credentials log a warning and fall back to inert placeholders so the
application still starts.
"""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from supabase import Client, create_client

load_dotenv()

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = "https://placeholder.supabase.co"
# Shaped like a JWT so the client accepts it; every request with it fails.
PLACEHOLDER_KEY = "placeholder.placeholder.placeholder"


class DataStoreConfig(BaseModel):
    """Connection settings for the Supabase project.

    Attributes:
        url: Project URL (SUPABASE_URL).
        anon_key: Anonymous public key (SUPABASE_ANON_KEY).
    """

    url: str = Field(default_factory=lambda: os.getenv("SUPABASE_URL", "").strip())
    anon_key: str = Field(default_factory=lambda: os.getenv("SUPABASE_ANON_KEY", "").strip())

    @property
    def is_placeholder(self) -> bool:
        return self.url == PLACEHOLDER_URL or self.anon_key == PLACEHOLDER_KEY


def get_datastore_config() -> DataStoreConfig:
    """Load data store settings, substituting placeholders for missing values.

    Returns:
        DataStoreConfig that is always usable to build a client.
    """
    config = DataStoreConfig()
    missing = [
        name
        for name, value in (("SUPABASE_URL", config.url), ("SUPABASE_ANON_KEY", config.anon_key))
        if not value
    ]
    if missing:
        logger.warning(
            f"Missing Supabase environment variables: {', '.join(missing)}. "
            "Using placeholder values; drafts will not be saved."
        )
        config = DataStoreConfig(
            url=config.url or PLACEHOLDER_URL,
            anon_key=config.anon_key or PLACEHOLDER_KEY,
        )
    return config


# Module-level singleton instance
_client: Client | None = None


def get_datastore_client() -> Client:
    """Get or create the global Supabase client."""
    global _client
    if _client is None:
        config = get_datastore_config()
        _client = create_client(config.url, config.anon_key)
    return _client
