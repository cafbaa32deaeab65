from __future__ import annotations

from functools import lru_cache

from supabase import Client, create_client

from app.core.config import settings


def supabase_configured() -> bool:
    key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY
    return bool(settings.SUPABASE_URL and key)


@lru_cache
def get_supabase_client() -> Client:
    key = settings.SUPABASE_SERVICE_ROLE_KEY or settings.SUPABASE_ANON_KEY
    if not settings.SUPABASE_URL or not key:
        raise ValueError("Supabase is not configured. Set SUPABASE_URL and a key.")
    return create_client(settings.SUPABASE_URL, key)
