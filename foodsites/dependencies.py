"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from typing import Optional

from foodsites.config import get_settings
from foodsites.content import SiteCollection
from foodsites.db import InMemoryRegistrationStore, RegistrationStore, SqlRegistrationStore
from foodsites.mailer import InMemoryMailer, Mailer, ResendMailer
from foodsites.supabase import SupabaseRegistrationStore

_store: RegistrationStore | None = None
_mailer: Mailer | None = None
_collection: SiteCollection | None = None


def get_registration_store() -> RegistrationStore:
    """
    Return a singleton registration store so in-memory data persists across requests.
    """
    global _store
    if _store:
        return _store

    settings = get_settings()
    if settings.use_in_memory_backends:
        _store = InMemoryRegistrationStore()
    elif settings.supabase_url:
        _store = SupabaseRegistrationStore(
            url=settings.supabase_url,
            service_role_key=settings.supabase_service_role_key or "",
            table=settings.supabase_table,
        )
    elif settings.database_url:
        _store = SqlRegistrationStore(settings.database_url)
    else:
        _store = InMemoryRegistrationStore()
    return _store


def get_mailer() -> Optional[Mailer]:
    """
    Return the contact mailer, or None when email delivery is not configured.
    """
    global _mailer
    if _mailer:
        return _mailer

    settings = get_settings()
    if settings.use_in_memory_backends:
        _mailer = InMemoryMailer(
            from_email=settings.contact_from_email,
            to_email=settings.contact_to_email or "team@example.test",
        )
    elif settings.resend_api_key and settings.contact_to_email:
        _mailer = ResendMailer(
            api_key=settings.resend_api_key,
            to_email=settings.contact_to_email,
            from_email=settings.contact_from_email,
            api_url=settings.resend_api_url,
        )
    return _mailer


def get_site_collection() -> SiteCollection:
    global _collection
    if _collection:
        return _collection
    _collection = SiteCollection(get_settings().content_dir)
    return _collection


def reset_dependencies() -> None:
    """Drop cached backends so the next request rebuilds them from settings."""
    global _store, _mailer, _collection
    _store = None
    _mailer = None
    _collection = None
