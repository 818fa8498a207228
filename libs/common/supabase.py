"""Supabase client accessor.

The admin client uses the service-role key and is the only way the API
touches auth.users (display names, user metadata, user CRUD).
"""

from functools import lru_cache

from supabase import Client, create_client

from libs.common.config import get_settings


@lru_cache
def get_supabase_admin_client() -> Client:
    """Return a cached client authenticated with the service-role key."""
    settings = get_settings()
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
