from sqlalchemy.exc import OperationalError

from app.core.dependencies import get_notifier
from app.db.session import get_db
from app.repositories.complaint import ComplaintRepository
from tests.conftest import bearer

VALID = {
    "title": "Broken heater",
    "description": "No heat since Monday",
    "category": "Technical",
    "priority": "High",
    "email": "a@b.com",
}


def submit(client, headers, **overrides):
    body = dict(VALID)
    body.update(overrides)
    return client.post("/api/complaints", json=body, headers=headers)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


class TestSubmit:
    def test_end_to_end_broken_heater(self, client, user_headers, admin_headers, notifier):
        response = submit(client, user_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Complaint submitted successfully"
        data = body["data"]
        assert data["status"] == "Pending"
        assert data["userId"] == "user-1"
        assert data["email"] == "a@b.com"
        assert "dateSubmitted" in data
        assert len(notifier.new_complaints) == 1

        response = client.patch(
            f"/api/complaints/{data['id']}", json={"status": "Resolved"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Resolved"
        assert client.get(f"/api/complaints/{data['id']}").json()["data"]["status"] == "Resolved"
        assert [c.email for c in notifier.status_changes] == ["a@b.com"]

    def test_requires_authentication(self, client, notifier):
        response = submit(client, {})

        assert response.status_code == 401
        assert response.json() == {"success": False, "error": "Unauthorized"}
        assert notifier.new_complaints == []

    def test_invalid_token_is_unauthenticated(self, client):
        response = submit(client, {"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_missing_fields(self, client, user_headers):
        response = client.post("/api/complaints", json={"title": "Heater"}, headers=user_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["details"] == [
            "Please provide a description for the complaint",
            "Please select a category",
            "Please select a priority level",
        ]

    def test_server_owned_fields_ignored(self, client, user_headers):
        response = submit(
            client,
            user_headers,
            status="Closed",
            dateSubmitted="1999-01-01T00:00:00Z",
            userId="someone-else",
        )

        data = response.json()["data"]
        assert data["status"] == "Pending"
        assert not data["dateSubmitted"].startswith("1999")
        assert data["userId"] == "user-1"

    def test_malformed_body(self, client, user_headers):
        response = client.post(
            "/api/complaints",
            content=b"{not json",
            headers={**user_headers, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False


class TestGetOne:
    def test_round_trip(self, client, user_headers):
        created = submit(client, user_headers, customerName="Ann").json()["data"]

        response = client.get(f"/api/complaints/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": created}
        assert created["customerName"] == "Ann"

    def test_not_found(self, client):
        response = client.get("/api/complaints/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Complaint not found"}


class TestList:
    def test_forbidden_for_users(self, client, user_headers):
        response = client.get("/api/complaints", headers=user_headers)

        assert response.status_code == 403
        assert response.json() == {"success": False, "error": "Forbidden"}

    def test_unauthorized_without_token(self, client):
        assert client.get("/api/complaints").status_code == 401

    def test_page_two_of_twenty_five(self, client, admin_headers, seed_complaints):
        seed_complaints([{} for _ in range(25)])

        response = client.get("/api/complaints?page=2&limit=10", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert [item["title"] for item in body["data"]] == [f"Complaint {i}" for i in range(14, 4, -1)]
        assert body["pagination"] == {"page": 2, "limit": 10, "total": 25, "pages": 3}

    def test_filter_composition(self, client, admin_headers, seed_complaints):
        seed_complaints([
            {"status": "Resolved", "priority": "High"},
            {"status": "Resolved", "priority": "Low"},
            {"status": "In Progress", "priority": "High"},
        ])

        both = client.get(
            "/api/complaints?status=Resolved&priority=High", headers=admin_headers
        ).json()
        assert [item["title"] for item in both["data"]] == ["Complaint 0"]

        unconstrained = client.get(
            "/api/complaints", params={"status": "all", "priority": "High"}, headers=admin_headers
        ).json()
        assert [item["title"] for item in unconstrained["data"]] == ["Complaint 2", "Complaint 0"]

        in_progress = client.get(
            "/api/complaints", params={"status": "In Progress"}, headers=admin_headers
        ).json()
        assert in_progress["pagination"]["total"] == 1

    def test_defaults_and_clamping(self, client, admin_headers, seed_complaints):
        seed_complaints([{} for _ in range(3)])

        body = client.get("/api/complaints?page=0&limit=0", headers=admin_headers).json()
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 3, "pages": 1}

        body = client.get("/api/complaints?limit=5000", headers=admin_headers).json()
        assert body["pagination"]["limit"] == 100

    def test_bad_query_values(self, client, admin_headers):
        assert client.get("/api/complaints?page=abc", headers=admin_headers).status_code == 400

    def test_unknown_filter_value_gives_empty_page(self, client, admin_headers, seed_complaints):
        seed_complaints([{}, {}])

        response = client.get("/api/complaints?status=Open", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"] == []
        assert body["pagination"] == {"page": 1, "limit": 10, "total": 0, "pages": 0}


class TestUpdate:
    def test_non_admin_cannot_update(self, client, user_headers, notifier):
        created = submit(client, user_headers).json()["data"]

        response = client.patch(
            f"/api/complaints/{created['id']}", json={"status": "Closed"}, headers=user_headers
        )
        assert response.status_code == 403

        response = client.patch(f"/api/complaints/{created['id']}", json={"status": "Closed"})
        assert response.status_code == 401

        assert client.get(f"/api/complaints/{created['id']}").json()["data"]["status"] == "Pending"
        assert notifier.status_changes == []

    def test_title_change_does_not_notify(self, client, user_headers, admin_headers, notifier):
        created = submit(client, user_headers).json()["data"]

        response = client.patch(
            f"/api/complaints/{created['id']}", json={"title": "Heater still broken"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["title"] == "Heater still broken"
        assert response.json()["message"] == "Complaint updated successfully"
        assert notifier.status_changes == []

    def test_unchanged_status_does_not_notify(self, client, user_headers, admin_headers, notifier):
        created = submit(client, user_headers).json()["data"]

        client.patch(f"/api/complaints/{created['id']}", json={"status": "Pending"}, headers=admin_headers)

        assert notifier.status_changes == []

    def test_validation_and_unknown_fields(self, client, user_headers, admin_headers):
        created = submit(client, user_headers).json()["data"]

        response = client.patch(
            f"/api/complaints/{created['id']}",
            json={"priority": "Urgent", "dateSubmitted": "2000-01-01"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["details"] == [
            "Please select a valid priority level",
            "Field 'dateSubmitted' cannot be updated",
        ]

    def test_not_found(self, client, admin_headers):
        response = client.patch("/api/complaints/missing", json={"status": "Closed"}, headers=admin_headers)
        assert response.status_code == 404


class TestDelete:
    def test_delete_flow(self, client, user_headers, admin_headers):
        created = submit(client, user_headers).json()["data"]
        url = f"/api/complaints/{created['id']}"

        assert client.delete(url, headers=user_headers).status_code == 403
        assert client.delete(url).status_code == 401

        response = client.delete(url, headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Complaint deleted successfully"}

        assert client.get(url).status_code == 404
        assert client.delete(url, headers=admin_headers).status_code == 404


def test_request_id_header_round_trips(client):
    response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-Process-Time" in response.headers


def test_tokens_for_other_users_are_distinct(client):
    first = submit(client, bearer("alice")).json()["data"]
    second = submit(client, bearer("bob")).json()["data"]
    assert (first["userId"], second["userId"]) == ("alice", "bob")


class RaisingNotifier:
    def notify_new_complaint(self, complaint):
        raise RuntimeError("smtp exploded")

    def notify_status_change(self, complaint):
        raise RuntimeError("smtp exploded")


class BrokenSession:
    def execute(self, *args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


class TestFailures:
    def test_get_one_storage_failure_is_generic(self, client, user_headers, monkeypatch):
        created = submit(client, user_headers).json()["data"]

        def broken(self, complaint_id):
            raise OperationalError("SELECT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(ComplaintRepository, "get_by_id", broken)

        response = client.get(f"/api/complaints/{created['id']}")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to fetch complaint"}

    def test_health_reports_database_outage(self, client):
        client.app.dependency_overrides[get_db] = lambda: BrokenSession()

        response = client.get("/api/health")

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "Database unavailable"}

    def test_notification_errors_do_not_change_responses(self, client, user_headers, admin_headers):
        client.app.dependency_overrides[get_notifier] = lambda: RaisingNotifier()

        response = submit(client, user_headers)
        assert response.status_code == 201
        complaint_id = response.json()["data"]["id"]

        response = client.patch(
            f"/api/complaints/{complaint_id}", json={"status": "Closed"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "Closed"

        assert client.get(f"/api/complaints/{complaint_id}").json()["data"]["status"] == "Closed"


class TestAccessGuard:
    def test_callers_without_admin_role_change_nothing(self, client, user_headers, notifier):
        complaint_id = submit(client, user_headers).json()["data"]["id"]
        url = f"/api/complaints/{complaint_id}"

        for headers in ({}, user_headers, bearer("someone", role="support")):
            assert client.get("/api/complaints", headers=headers).status_code in (401, 403)
            assert client.patch(url, json={"status": "Closed"}, headers=headers).status_code in (401, 403)
            assert client.delete(url, headers=headers).status_code in (401, 403)

        data = client.get(url).json()["data"]
        assert data["status"] == "Pending"
        assert notifier.status_changes == []

    def test_anonymous_submit_is_unauthorized_not_an_error(self, client):
        response = submit(client, {})

        assert response.status_code == 401
        assert client.get("/api/complaints", headers=bearer("admin-1", role="admin")).json()["pagination"]["total"] == 0
