"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from signup.config import Settings, get_settings
from signup.csv_store import CsvFileRegistrationStore, ObjectCsvRegistrationStore
from signup.db import InMemoryRegistrationStore, RegistrationStore, SqlRegistrationStore
from signup.storage import CosStorageClient, InMemoryStorageClient, StorageClient

logger = logging.getLogger(__name__)

_registration_store: RegistrationStore | None = None
_storage_client: StorageClient | None = None


def get_storage_client() -> StorageClient:
    global _storage_client
    if _storage_client:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.cos_bucket:
        _storage_client = InMemoryStorageClient()
    else:
        _storage_client = CosStorageClient(
            bucket=settings.cos_bucket,
            region=settings.cos_region or "",
            endpoint=settings.cos_endpoint or "",
            access_key_id=settings.aws_access_key_id or "",
            secret_access_key=settings.aws_secret_access_key or "",
        )
    return _storage_client


def _firestore_store(settings: Settings) -> RegistrationStore:
    import firebase_admin
    from firebase_admin import firestore

    from signup.firestore_store import FirestoreRegistrationStore

    try:
        firebase_admin.get_app()
    except ValueError:
        firebase_admin.initialize_app()
    return FirestoreRegistrationStore(
        firestore.client(), collection=settings.firestore_collection
    )


def build_registration_store(settings: Settings) -> RegistrationStore:
    """Construct the store named by settings.registration_backend."""
    backend = settings.registration_backend
    if settings.use_in_memory_backends or backend == "memory":
        return InMemoryRegistrationStore()
    if backend == "csv":
        return CsvFileRegistrationStore(settings.registrations_file)
    if backend == "sql":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when REGISTRATION_BACKEND=sql")
        return SqlRegistrationStore(settings.database_url)
    if backend == "object":
        return ObjectCsvRegistrationStore(
            get_storage_client(), settings.registrations_object_key
        )
    if backend == "firestore":
        return _firestore_store(settings)
    raise ValueError(f"Unknown registration backend: {backend}")


def get_registration_store() -> RegistrationStore:
    """
    Return a singleton store, prepared once on first use.
    """
    global _registration_store
    if _registration_store:
        return _registration_store

    settings = get_settings()
    store = build_registration_store(settings)
    store.ensure_ready()
    logger.info(
        "Using %s at %s",
        type(store).__name__,
        store.location,
    )
    _registration_store = store
    return _registration_store
