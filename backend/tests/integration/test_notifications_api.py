"""Integration tests for notification endpoints."""
import pytest

from agency.db.models.notification import Notification, NotificationType


@pytest.fixture
def pr_notifications(db_session, pr_user, other_pr_user):
    items = [
        Notification(user_id=pr_user.user_id, type=NotificationType.NEW_CLIENT, message="first"),
        Notification(user_id=pr_user.user_id, type=NotificationType.APPOINTMENT, message="second"),
        Notification(user_id=other_pr_user.user_id, type=NotificationType.TASK, message="not yours"),
    ]
    db_session.add_all(items)
    db_session.commit()
    return items


class TestNotifications:

    def test_list_only_own(self, client, pr_headers, pr_notifications):
        response = client.get("/api/v1/notifications", headers=pr_headers)
        assert response.status_code == 200
        messages = {n["message"] for n in response.json()}
        assert messages == {"first", "second"}

    def test_unread_count_and_mark_read(self, client, pr_headers, pr_notifications):
        response = client.get("/api/v1/notifications/unread-count", headers=pr_headers)
        assert response.json() == {"unread": 2}

        notification_id = pr_notifications[0].notification_id
        response = client.post(f"/api/v1/notifications/{notification_id}/read", headers=pr_headers)
        assert response.status_code == 200
        assert response.json()["read"] is True

        response = client.get("/api/v1/notifications/unread-count", headers=pr_headers)
        assert response.json() == {"unread": 1}

        response = client.get("/api/v1/notifications?unread_only=true", headers=pr_headers)
        assert [n["message"] for n in response.json()] == ["second"]

    def test_cannot_read_others_notification(self, client, pr_headers, pr_notifications):
        foreign_id = pr_notifications[2].notification_id
        response = client.post(f"/api/v1/notifications/{foreign_id}/read", headers=pr_headers)
        assert response.status_code == 404

    def test_read_all(self, client, pr_headers, other_pr_headers, pr_notifications):
        response = client.post("/api/v1/notifications/read-all", headers=pr_headers)
        assert response.status_code == 200
        assert response.json()["updated"] == 2

        assert client.get("/api/v1/notifications/unread-count", headers=pr_headers).json() == {"unread": 0}
        assert client.get("/api/v1/notifications/unread-count", headers=other_pr_headers).json() == {"unread": 1}
