import json

import pytest
import requests

ADMIN_EMAIL = "admin@example.com"


def make_response(status_code, payload=None, url="https://firestore.googleapis.com/v1/x"):
    r = requests.Response()
    r.status_code = status_code
    r.url = url
    r._content = json.dumps(payload if payload is not None else {}).encode("utf-8")
    return r


class FakeSession:
    """Stands in for requests.Session; replays canned responses in order."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "params": params, "timeout": timeout})
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def close(self):
        self.closed = True


def firestore_doc(doc_id, **fields):
    return {
        "name": f"projects/demo/databases/(default)/documents/contribution/{doc_id}",
        "fields": {k: {"stringValue": v} for k, v in fields.items()},
    }


@pytest.fixture
def database_store(settings):
    settings.CONTRIBUTIONS_STORE = "database"
    settings.CONTRIBUTIONS_ADMIN_EMAILS = [ADMIN_EMAIL]
    return settings


@pytest.fixture
def make_user(db, django_user_model):
    def _make(email="researcher@example.com"):
        return django_user_model.objects.create_user(email=email, password="s3cret-pass-123")
    return _make


@pytest.fixture
def login(client):
    def _login(user):
        client.force_login(user, backend="django.contrib.auth.backends.ModelBackend")
        return client
    return _login


@pytest.fixture
def record(db):
    from contributions.models import ContributionRecord

    def _record(email, **fields):
        return ContributionRecord.objects.create(email=email, **fields)
    return _record
