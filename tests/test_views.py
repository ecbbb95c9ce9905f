import csv
import io
from unittest.mock import patch

import pytest
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory
from django.urls import reverse

from contributions import views
from contributions.client import FirestoreClient
from contributions.store import FirestoreStore
from tests.conftest import ADMIN_EMAIL, FakeSession, make_response

pytestmark = pytest.mark.django_db


def test_home_offers_get_started_to_anonymous_users(client):
    response = client.get(reverse("home"))
    assert response.status_code == 200
    assert b"Get Started" in response.content


def test_home_links_signed_in_users_to_dashboard(database_store, make_user, login):
    client = login(make_user())
    response = client.get(reverse("home"))
    assert b"Go to Dashboard" in response.content


def test_dashboard_redirects_anonymous_users_to_login(client):
    response = client.get(reverse("contributions:dashboard"))
    assert response.status_code == 302
    assert response.url.startswith(reverse("account_login"))


def test_dashboard_without_document_shows_empty_state(database_store, make_user, login):
    client = login(make_user())
    response = client.get(reverse("contributions:dashboard"))
    assert response.status_code == 200
    assert b"No contribution data found" in response.content
    assert response.context["contribution"] is None


def test_dashboard_overview_previews_three_entries(database_store, make_user, login, record):
    user = make_user("r@example.com")
    record(
        "r@example.com",
        patents="Patent one\nPatent two\n\nPatent three\nPatent four\nPatent five",
        publications="Only paper",
    )
    response = login(user).get(reverse("contributions:dashboard"))

    assert response.context["active_tab"] == "overview"
    body = response.content.decode()
    assert "Patent three" in body
    assert "Patent four" not in body
    assert "View all patents (2 more)" in body
    assert "Only paper" in body
    assert "View all publications" not in body
    assert "No conference information available" in body
    assert "No event information available" in body


def test_dashboard_category_tab_lists_everything(database_store, make_user, login, record):
    user = make_user("r@example.com")
    record("r@example.com", patents="P1\nP2\nP3\nP4\nP5")
    response = login(user).get(reverse("contributions:dashboard"), {"tab": "patents"})

    assert response.context["active_tab"] == "patents"
    body = response.content.decode()
    assert "Your Patents" in body
    for entry in ("P1", "P2", "P3", "P4", "P5"):
        assert entry in body
    assert "more)" not in body


def test_dashboard_unknown_tab_falls_back_to_overview(database_store, make_user, login, record):
    user = make_user("r@example.com")
    record("r@example.com", events="E1")
    response = login(user).get(reverse("contributions:dashboard"), {"tab": "bogus"})
    assert response.context["active_tab"] == "overview"


def test_dashboard_fetch_failure_looks_like_no_data(settings, make_user, login):
    settings.CONTRIBUTIONS_STORE = "firestore"
    failing = FirestoreStore(FirestoreClient("demo", session=FakeSession(make_response(500))))
    with patch.object(views, "open_store", return_value=failing):
        response = login(make_user()).get(reverse("contributions:dashboard"))
    assert response.status_code == 200
    assert b"No contribution data found" in response.content


def test_admin_dashboard_redirects_anonymous(database_store, client):
    response = client.get(reverse("contributions:admin_dashboard"))
    assert response.status_code == 302
    assert response.url.startswith(reverse("account_login"))


def test_admin_dashboard_redirects_users_not_on_allow_list(database_store, make_user, login):
    client = login(make_user("someone@example.com"))
    for name in ("contributions:admin_dashboard", "contributions:export_csv"):
        response = client.get(reverse(name))
        assert response.status_code == 302
        assert response.url == reverse("contributions:dashboard")


def test_empty_allow_list_admits_nobody(settings, make_user, login):
    settings.CONTRIBUTIONS_STORE = "database"
    settings.CONTRIBUTIONS_ADMIN_EMAILS = []
    response = login(make_user(ADMIN_EMAIL)).get(reverse("contributions:admin_dashboard"))
    assert response.status_code == 302


def test_admin_dashboard_lists_every_record(database_store, make_user, login, record):
    record("a@example.com", patents="P1\nP2")
    record("b@example.com")
    # allow-list comparison ignores case
    response = login(make_user("Admin@Example.com")).get(reverse("contributions:admin_dashboard"))

    assert response.status_code == 200
    rows = response.context["rows"]
    assert [r["email"] for r in rows] == ["a@example.com", "b@example.com"]
    assert rows[0]["cells"] == ["P1\nP2", "", "", ""]
    assert b"Export CSV" in response.content


def test_admin_dashboard_with_no_records(database_store, make_user, login):
    response = login(make_user(ADMIN_EMAIL)).get(reverse("contributions:admin_dashboard"))
    assert b"No contributions found." in response.content


def test_export_csv_download(database_store, make_user, login, record):
    record("a@example.com", publications='He said "hi"')
    response = login(make_user(ADMIN_EMAIL)).get(reverse("contributions:export_csv"))

    assert response.status_code == 200
    assert response["Content-Type"] == "text/csv"
    assert response["Content-Disposition"] == 'attachment; filename="contributions.csv"'
    assert response.content.decode() == (
        "email,patents,publications,conferences,events\n"
        '"a@example.com","","He said ""hi""","",""'
    )


def test_admin_guard_with_request_factory(database_store, make_user):
    request = RequestFactory().get("/admin-dashboard/")
    request.user = AnonymousUser()
    response = views.admin_dashboard(request)
    assert response.status_code == 302
    assert "next=/admin-dashboard/" in response.url

    request.user = make_user("someone@example.com")
    response = views.admin_dashboard(request)
    assert response.status_code == 302
    assert response.url == "/dashboard/"


def test_signed_in_user_not_on_allow_list_lands_on_dashboard(database_store, make_user, login, record):
    record("someone@example.com", events="Keynote at PyCon")
    client = login(make_user("someone@example.com"))
    for name in ("contributions:admin_dashboard", "contributions:export_csv"):
        # the test client raises RedirectCycleError if the guard loops
        response = client.get(reverse(name), follow=True)
        assert response.redirect_chain == [(reverse("contributions:dashboard"), 302)]
        assert response.status_code == 200
        assert b"Keynote at PyCon" in response.content


def test_export_keeps_stored_text_unchanged(database_store, make_user, login, record):
    original = "  Paper A\n\nPaper B  "
    record("a@example.com", publications=original, patents=r"P1\nP2")
    response = login(make_user(ADMIN_EMAIL)).get(reverse("contributions:export_csv"))

    parsed = list(csv.reader(io.StringIO(response.content.decode())))
    assert parsed[1] == ["a@example.com", r"P1\nP2", original, "", ""]


def test_admin_table_shows_stored_text(database_store, make_user, login, record):
    record("a@example.com", patents="P1\n\nP2 ")
    response = login(make_user(ADMIN_EMAIL)).get(reverse("contributions:admin_dashboard"))
    assert response.context["rows"][0]["cells"][0] == "P1\n\nP2 "
