"""Integration tests for client endpoints."""
import io
from datetime import datetime

import pandas as pd

from agency.db.models.client import CreativeStatus, TransferStatus
from agency.db.models.notification import Notification


def _client_payload(**overrides):
    payload = {
        "name": "Nile Bakery",
        "phone": "01011111111",
        "email": "owner@nilebakery.com",
        "address": "Cairo",
        "notes": "Walk-in",
        "business_name": "Nile Bakery LLC",
        "business_field": "Food"
    }
    payload.update(overrides)
    return payload


class TestCreateClient:

    def test_moderator_creates_client(self, client, moderator_user, moderator_headers, pr_user, db_session):
        response = client.post(
            "/api/v1/clients",
            headers=moderator_headers,
            json=_client_payload(assigned_to_pr=pr_user.user_id)
        )
        assert response.status_code == 201
        data = response.json()
        assert data["pr_status"] == "pending"
        assert data["transfer_status"] == "active"
        assert data["registered_by"] == moderator_user.user_id
        assert data["basic_info"]["email"] == "owner@nilebakery.com"
        assert data["service_requests"]["market_research"] is False

        notifications = db_session.query(Notification).filter(Notification.user_id == pr_user.user_id).all()
        assert len(notifications) == 1
        assert notifications[0].type.value == "new_client"
        assert notifications[0].related_client_id == data["client_id"]

    def test_pr_cannot_create_client(self, client, pr_headers):
        response = client.post("/api/v1/clients", headers=pr_headers, json=_client_payload())
        assert response.status_code == 403

    def test_validation(self, client, moderator_headers):
        response = client.post(
            "/api/v1/clients",
            headers=moderator_headers,
            json=_client_payload(name="A", phone="123", email="not-an-email")
        )
        assert response.status_code == 422

    def test_assign_to_non_pr_rejected(self, client, moderator_headers, creative_user):
        response = client.post(
            "/api/v1/clients",
            headers=moderator_headers,
            json=_client_payload(assigned_to_pr=creative_user.user_id)
        )
        assert response.status_code == 400


class TestListClients:

    def test_moderator_default_tab_is_my_clients(self, client, moderator_user, moderator_headers, make_client):
        make_client(name="Mine", registered_by=moderator_user.user_id)
        make_client(name="Someone else's", registered_by=None)

        response = client.get("/api/v1/clients", headers=moderator_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["tab"] == "my-clients"
        assert [c["name"] for c in data["items"]] == ["Mine"]

        response = client.get("/api/v1/clients?tab=all", headers=moderator_headers)
        assert response.json()["total"] == 2

    def test_pr_sees_only_assigned(self, client, pr_user, other_pr_user, pr_headers, make_client):
        make_client(name="Assigned", assigned_to_pr=pr_user.user_id)
        make_client(name="Other", assigned_to_pr=other_pr_user.user_id)

        response = client.get("/api/v1/clients?tab=my-clients", headers=pr_headers)
        assert [c["name"] for c in response.json()["items"]] == ["Assigned"]

    def test_pr_today_calls(self, client, pr_user, pr_headers, make_client):
        today = datetime.now().replace(hour=14, minute=0, second=0, microsecond=0).isoformat()
        make_client(
            name="Call today",
            assigned_to_pr=pr_user.user_id,
            pr_appointments=[{"date": today, "time": "14:00", "status": "scheduled"}]
        )
        make_client(
            name="Cancelled",
            assigned_to_pr=pr_user.user_id,
            pr_appointments=[{"date": today, "time": "14:00", "status": "cancelled"}]
        )

        response = client.get("/api/v1/clients?tab=today-calls", headers=pr_headers)
        assert [c["name"] for c in response.json()["items"]] == ["Call today"]

    def test_specialists_see_approved_requested_clients(
        self, client, researcher_headers, content_headers, make_client
    ):
        make_client(
            name="Research me",
            transfer_status=TransferStatus.APPROVED,
            service_requests={"market_research": True, "content": True, "creative": False}
        )
        make_client(
            name="Not approved",
            transfer_status=TransferStatus.ACTIVE,
            service_requests={"market_research": True, "content": False, "creative": False}
        )

        response = client.get("/api/v1/clients", headers=researcher_headers)
        data = response.json()
        assert data["tab"] == "my-tasks"
        assert [c["name"] for c in data["items"]] == ["Research me"]

        # creative work has not completed yet
        response = client.get("/api/v1/clients", headers=content_headers)
        assert response.json()["items"] == []

    def test_search(self, client, moderator_headers, make_client):
        make_client(name="Nile Bakery", phone="01011111111")
        make_client(name="Delta Motors", phone="01022222222", email="sales@delta.com")

        response = client.get("/api/v1/clients?tab=all&search=SALES", headers=moderator_headers)
        assert [c["name"] for c in response.json()["items"]] == ["Delta Motors"]

    def test_requires_auth(self, client):
        assert client.get("/api/v1/clients").status_code == 401


class TestClientDetail:

    def test_visible_sections_for_moderator(self, client, moderator_headers, make_client):
        record = make_client(
            service_requests={"market_research": True, "content": True, "creative": True},
            creative_status=CreativeStatus.COMPLETED,
            transfer_status=TransferStatus.APPROVED
        )
        response = client.get(f"/api/v1/clients/{record.client_id}", headers=moderator_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["visible_sections"] == ["pr", "market_research", "creative", "content"]
        assert data["agreement_visible"] is True

    def test_visible_sections_for_creative(self, client, creative_headers, make_client):
        record = make_client(
            service_requests={"market_research": True, "content": False, "creative": False},
            transfer_status=TransferStatus.APPROVED
        )
        response = client.get(f"/api/v1/clients/{record.client_id}", headers=creative_headers)
        data = response.json()
        assert data["visible_sections"] == ["market_research"]
        assert data["agreement_visible"] is True

    def test_specialist_sections_hidden_before_approval(self, client, creative_headers, moderator_headers, make_client):
        record = make_client(service_requests={"market_research": True, "content": False, "creative": True})
        data = client.get(f"/api/v1/clients/{record.client_id}", headers=creative_headers).json()
        assert data["visible_sections"] == []
        assert data["agreement_visible"] is False

        data = client.get(f"/api/v1/clients/{record.client_id}", headers=moderator_headers).json()
        assert data["visible_sections"] == ["pr", "market_research", "creative"]

    def test_missing_client(self, client, moderator_headers):
        response = client.get("/api/v1/clients/9999", headers=moderator_headers)
        assert response.status_code == 404


class TestUpdateClient:

    def test_update_basic_fields(self, client, moderator_headers, make_client):
        record = make_client()
        response = client.put(
            f"/api/v1/clients/{record.client_id}",
            headers=moderator_headers,
            json={
                "name": "Renamed",
                "basic_info": {"email": "new@example.com", "address": "Giza", "notes": ""},
                "service_requests": {"market_research": True, "content": False, "creative": True}
            }
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["basic_info"]["address"] == "Giza"
        assert data["service_requests"]["creative"] is True

    def test_reassign_pr_notifies(self, client, moderator_headers, pr_user, make_client, db_session):
        record = make_client()
        response = client.put(
            f"/api/v1/clients/{record.client_id}",
            headers=moderator_headers,
            json={"assigned_to_pr": pr_user.user_id}
        )
        assert response.status_code == 200
        assert response.json()["assigned_to_pr"] == pr_user.user_id
        assert db_session.query(Notification).filter(Notification.user_id == pr_user.user_id).count() == 1

    def test_rejects_null_and_short_required_fields(self, client, moderator_headers, make_client):
        record = make_client(name="Nile Bakery", phone="01011111111")
        for payload in (
            {"name": None},
            {"phone": None},
            {"service_requests": None},
            {"name": "N"},
            {"phone": "0101"},
        ):
            response = client.put(f"/api/v1/clients/{record.client_id}", headers=moderator_headers, json=payload)
            assert response.status_code == 422, payload

        response = client.get(f"/api/v1/clients/{record.client_id}", headers=moderator_headers)
        assert response.json()["name"] == "Nile Bakery"
        assert response.json()["phone"] == "01011111111"

    def test_pr_cannot_edit(self, client, pr_headers, make_client):
        record = make_client()
        response = client.put(f"/api/v1/clients/{record.client_id}", headers=pr_headers, json={"name": "X"})
        assert response.status_code == 403


class TestExport:

    def test_csv_export_follows_filter(self, client, moderator_user, moderator_headers, make_client):
        make_client(name="Mine", registered_by=moderator_user.user_id)
        make_client(name="Not mine", registered_by=None)

        response = client.get("/api/v1/clients/export?format=csv", headers=moderator_headers)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert "attachment; filename=clients_report_" in response.headers["content-disposition"]
        lines = response.text.strip().splitlines()
        assert lines[0].startswith("Name,Phone,Email")
        assert len(lines) == 2
        assert lines[1].startswith("Mine,")

    def test_xlsx_export(self, client, moderator_headers, make_client):
        make_client(name="Nile Bakery")
        response = client.get("/api/v1/clients/export?format=xlsx&tab=all", headers=moderator_headers)
        assert response.status_code == 200
        assert response.headers["content-disposition"].endswith(".xlsx")
        df = pd.read_excel(io.BytesIO(response.content), sheet_name="Data", engine="openpyxl")
        assert list(df["Name"]) == ["Nile Bakery"]

    def test_unknown_format_rejected(self, client, moderator_headers):
        response = client.get("/api/v1/clients/export?format=pdf", headers=moderator_headers)
        assert response.status_code == 422
