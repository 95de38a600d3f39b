"""Builds the configured SearchBackend."""
import logging

from wwfm.config import Settings
from wwfm.services.search_backend import SearchBackend

logger = logging.getLogger(__name__)


def build_search_backend(settings: Settings) -> SearchBackend:
    """
    Create the backend selected by settings.search_backend.

    Raises:
        ValueError: Unknown backend name or missing Supabase credentials
    """
    if settings.search_backend == "postgrest":
        from wwfm.services.postgrest_backend import PostgrestSearchBackend

        if not settings.supabase_url or not settings.supabase_key:
            raise ValueError("search_backend=postgrest requires SUPABASE_URL and SUPABASE_KEY")

        logger.info(f"Using PostgREST search backend at {settings.supabase_url}")
        return PostgrestSearchBackend(
            settings.supabase_url,
            settings.supabase_key,
            timeout=settings.backend_timeout_seconds,
        )

    if settings.search_backend == "sql":
        # Engine is created on import
        from wwfm.database import SessionLocal
        from wwfm.services.sql_backend import SqlSearchBackend

        logger.info("Using SQL search backend")
        return SqlSearchBackend(SessionLocal)

    raise ValueError(f"Unknown search backend: {settings.search_backend}")
