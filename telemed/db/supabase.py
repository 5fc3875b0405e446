"""Supabase client singleton.

``get_supabase()`` lazily builds one process-wide client for the profile
tables.  PostgREST calls use ``settings.SUPABASE_TIMEOUT_SECONDS`` so a
stalled database surfaces as a store error instead of a hung request.
"""

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from telemed.core.config import settings

_client: Client | None = None


def get_supabase() -> Client:
    """Return the shared Supabase client, creating it on first call."""
    global _client
    if _client is None:
        options = ClientOptions(postgrest_client_timeout=settings.SUPABASE_TIMEOUT_SECONDS)
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY, options=options)
    return _client


def reset_supabase() -> None:
    """Drop the cached client; the next ``get_supabase()`` rebuilds it."""
    global _client
    _client = None
