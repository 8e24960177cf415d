"""Supabase client used by the remote document store."""

import logging
from functools import lru_cache

from supabase import Client, create_client
from supabase.client import ClientOptions

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Return the shared Supabase client, or None when credentials are missing.

    Creating the client does not contact the server; the first query against
    the system_data table is what surfaces network errors.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase not configured: set STOREHUB_SUPABASE_URL and STOREHUB_SUPABASE_KEY")
        return None

    options = ClientOptions(postgrest_client_timeout=settings.request_timeout_seconds)
    try:
        return create_client(settings.supabase_url, settings.supabase_key, options=options)
    except Exception as exc:
        logger.error("Failed to create Supabase client for %s: %s", settings.supabase_url, exc)
        return None


# Table layout (see sql/system_data.sql):
#
#   system_data(id text primary key, data jsonb not null, updated_at timestamptz)
#
# A trigger stamps updated_at on every write.
