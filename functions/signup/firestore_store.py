"""
Firestore-backed registration store, shared by the FastAPI service and the
Cloud Functions.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from google.cloud.firestore_v1 import Query

from shared.constants import REGISTRATIONS_COLLECTION
from shared.csv_codec import encode_document
from shared.types import RegistrationRecord

logger = logging.getLogger(__name__)

# Firestore caps a write batch at 500 operations.
DELETE_BATCH_SIZE = 500


class FirestoreRegistrationStore:
    """One Firestore document per registration."""

    def __init__(self, client: Any, collection: str = REGISTRATIONS_COLLECTION):
        self.client = client
        self.collection = collection
        self.location = f"firestore:{collection}"

    def _collection(self):
        return self.client.collection(self.collection)

    def ensure_ready(self) -> None:
        # Firestore creates collections on first write.
        return None

    def add(self, record: RegistrationRecord) -> None:
        _, doc_ref = self._collection().add(record.as_dict())
        logger.info("Registration saved with ID: %s", doc_ref.id)

    def list_recent(self, limit: Optional[int] = None) -> list[RegistrationRecord]:
        query = self._collection().order_by("timestamp", direction=Query.DESCENDING)
        if limit is not None:
            query = query.limit(limit)
        return [RegistrationRecord.from_dict(doc.to_dict()) for doc in query.stream()]

    def count(self) -> int:
        result = self._collection().count().get()
        return int(result[0][0].value)

    def export_document(self) -> str:
        return encode_document(self.list_recent())

    def reset(self) -> None:
        deleted = 0
        while True:
            docs = list(self._collection().limit(DELETE_BATCH_SIZE).stream())
            if not docs:
                break
            batch = self.client.batch()
            for doc in docs:
                batch.delete(doc.reference)
            batch.commit()
            deleted += len(docs)
        logger.info("Deleted %d registrations from %s", deleted, self.collection)
