import logging
from urllib.parse import quote, unquote

import requests

logger = logging.getLogger(__name__)

FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"


class FirestoreError(Exception):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


def decode_value(value: dict):
    """Convert a Firestore REST typed value into a plain Python value."""
    if not value:
        return None
    if "nullValue" in value:
        return None
    if "stringValue" in value:
        return value["stringValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "timestampValue" in value:
        return value["timestampValue"]
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values", [])]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields", {}))
    # referenceValue, bytesValue, geoPointValue: keep the raw payload
    return next(iter(value.values()))


def decode_fields(fields: dict) -> dict:
    return {k: decode_value(v) for k, v in (fields or {}).items()}


def document_id(document: dict) -> str:
    name = document.get("name") or ""
    return unquote(name.rsplit("/", 1)[-1])


class FirestoreClient:
    """
    Read-only client for the Firestore REST API.

    Constructed explicitly from configuration and closed by its owner; it
    keeps one requests.Session for its lifetime.
    """

    def __init__(
        self,
        project_id: str,
        api_key: str = "",
        database_id: str = "(default)",
        bearer_token: str = "",
        timeout: int = 20,
        session=None,
    ):
        self.project_id = project_id
        self.api_key = api_key
        self.database_id = database_id or "(default)"
        self.bearer_token = bearer_token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings):
        firebase = getattr(settings, "FIREBASE", {}) or {}
        return cls(
            project_id=firebase.get("project_id", ""),
            api_key=firebase.get("api_key", ""),
            database_id=firebase.get("database_id", "(default)"),
            bearer_token=firebase.get("bearer_token", ""),
            timeout=getattr(settings, "FIREBASE_TIMEOUT_SECONDS", 20),
        )

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def documents_url(self) -> str:
        return (
            f"{FIRESTORE_BASE_URL}/projects/{self.project_id}"
            f"/databases/{self.database_id}/documents"
        )

    def _headers(self):
        h = {"Accept": "application/json"}
        if self.bearer_token:
            h["Authorization"] = f"Bearer {self.bearer_token}"
        return h

    def _params(self, params=None):
        p = dict(params or {})
        if self.api_key:
            p["key"] = self.api_key
        return p

    def _get(self, path: str, params=None):
        if not self.project_id:
            raise FirestoreError("Firestore project id is not configured")
        url = f"{self.documents_url}/{path.lstrip('/')}"
        try:
            r = self.session.get(
                url,
                headers=self._headers(),
                params=self._params(params),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("Firestore GET %s failed: %s", url, str(e))
            raise FirestoreError(f"Firestore request failed: {e}") from e
        if r.status_code == 404:
            return None
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            logger.error(
                "Firestore GET %s failed: %s %s", url, r.status_code, r.text[:500]
            )
            raise FirestoreError(
                f"Firestore returned HTTP {r.status_code}", status_code=r.status_code
            ) from e
        return r.json()

    def get_document(self, collection: str, doc_id: str):
        """Return the document's decoded fields, or None when it does not exist."""
        if not doc_id:
            return None
        payload = self._get(f"{quote(collection, safe='')}/{quote(doc_id, safe='')}")
        if payload is None:
            return None
        return decode_fields(payload.get("fields", {}))

    def list_documents(self, collection: str, page_size: int = 300):
        """Yield (document id, decoded fields) for every document in a collection."""
        page_token = None
        while True:
            params = {"pageSize": page_size}
            if page_token:
                params["pageToken"] = page_token
            payload = self._get(quote(collection, safe=""), params=params) or {}
            for doc in payload.get("documents", []):
                yield document_id(doc), decode_fields(doc.get("fields", {}))
            page_token = payload.get("nextPageToken")
            if not page_token:
                break
