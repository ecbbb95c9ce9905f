import logging

from django.conf import settings

from .client import FirestoreClient
from .records import Contribution

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION = "contribution"


class ContributionStore:
    """Read-only access to contribution records, keyed by email."""

    def get(self, email: str):
        raise NotImplementedError

    def all(self) -> list:
        raise NotImplementedError

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class FirestoreStore(ContributionStore):
    def __init__(self, client: FirestoreClient, collection: str = DEFAULT_COLLECTION):
        self.client = client
        self.collection = collection

    def get(self, email: str):
        fields = self.client.get_document(self.collection, email)
        if fields is None:
            return None
        return Contribution.from_fields(email, fields)

    def all(self) -> list:
        return [
            Contribution.from_fields(doc_id, fields)
            for doc_id, fields in self.client.list_documents(self.collection)
        ]

    def close(self):
        self.client.close()


class DatabaseStore(ContributionStore):
    def get(self, email: str):
        from .models import ContributionRecord

        if not email:
            return None
        rec = ContributionRecord.objects.filter(email=email).first()
        return rec.to_contribution() if rec else None

    def all(self) -> list:
        from .models import ContributionRecord

        return [rec.to_contribution() for rec in ContributionRecord.objects.all()]


def configured_backend() -> str:
    backend = getattr(settings, "CONTRIBUTIONS_STORE", "")
    if backend:
        return backend
    firebase = getattr(settings, "FIREBASE", {}) or {}
    return "firestore" if firebase.get("project_id") else "database"


def open_store(backend: str = None) -> ContributionStore:
    """Build the configured store. Callers own it and must close it."""
    backend = backend or configured_backend()
    if backend == "firestore":
        collection = getattr(settings, "CONTRIBUTIONS_COLLECTION", DEFAULT_COLLECTION)
        return FirestoreStore(FirestoreClient.from_settings(settings), collection)
    if backend == "database":
        return DatabaseStore()
    raise ValueError(f"Unknown contributions store backend: {backend!r}")
