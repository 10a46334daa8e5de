"""Integration tests for user management endpoints."""


class TestUserAdministration:
    """Admin-only user management."""

    def test_list_users_admin_only(self, client, auth_headers, moderator_headers, pr_user):
        response = client.get("/api/v1/users", headers=auth_headers)
        assert response.status_code == 200
        emails = [u["email"] for u in response.json()]
        assert "pr@test.com" in emails

        response = client.get("/api/v1/users", headers=moderator_headers)
        assert response.status_code == 403

    def test_list_users_by_role(self, client, auth_headers, pr_user, creative_user):
        response = client.get("/api/v1/users?role=creative", headers=auth_headers)
        assert response.status_code == 200
        assert [u["email"] for u in response.json()] == ["creative@test.com"]

    def test_create_and_get_user(self, client, auth_headers):
        response = client.post(
            "/api/v1/users",
            headers=auth_headers,
            json={
                "email": "newpr@test.com",
                "password": "password123",
                "full_name": "New PR",
                "role": "pr"
            }
        )
        assert response.status_code == 201
        user_id = response.json()["user_id"]

        response = client.get(f"/api/v1/users/{user_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["role"] == "pr"

    def test_create_duplicate_email(self, client, auth_headers, pr_user):
        response = client.post(
            "/api/v1/users",
            headers=auth_headers,
            json={"email": pr_user.email, "password": "password123"}
        )
        assert response.status_code == 400

    def test_get_missing_user(self, client, auth_headers):
        response = client.get("/api/v1/users/9999", headers=auth_headers)
        assert response.status_code == 404

    def test_update_role_and_manager(self, client, auth_headers, admin_user, pr_user):
        response = client.put(
            f"/api/v1/users/{pr_user.user_id}",
            headers=auth_headers,
            json={"role": "creative", "direct_manager_id": admin_user.user_id}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "creative"
        assert data["direct_manager_id"] == admin_user.user_id

    def test_user_cannot_manage_themselves(self, client, auth_headers, pr_user):
        response = client.put(
            f"/api/v1/users/{pr_user.user_id}",
            headers=auth_headers,
            json={"direct_manager_id": pr_user.user_id}
        )
        assert response.status_code == 400

    def test_delete_deactivates(self, client, auth_headers, db_session, pr_user):
        response = client.delete(f"/api/v1/users/{pr_user.user_id}", headers=auth_headers)
        assert response.status_code == 204

        db_session.refresh(pr_user)
        assert pr_user.is_active is False

        response = client.get(f"/api/v1/users/{pr_user.user_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["is_active"] is False

    def test_cannot_deactivate_self(self, client, auth_headers, admin_user):
        response = client.delete(f"/api/v1/users/{admin_user.user_id}", headers=auth_headers)
        assert response.status_code == 400

    def test_deactivated_user_token_rejected(self, client, auth_headers, pr_user, pr_headers):
        client.delete(f"/api/v1/users/{pr_user.user_id}", headers=auth_headers)
        response = client.get("/api/v1/auth/me", headers=pr_headers)
        assert response.status_code == 403


class TestUserSelfService:
    """Directory and profile endpoints available to every active user."""

    def test_directory_filtered_by_role(self, client, moderator_headers, pr_user, other_pr_user, creative_user):
        response = client.get("/api/v1/users/directory?role=pr", headers=moderator_headers)
        assert response.status_code == 200
        entries = response.json()
        assert {e["email"] for e in entries} == {"pr@test.com", "pr2@test.com"}
        assert set(entries[0]) == {"user_id", "full_name", "email", "role"}

    def test_directory_hides_inactive_users(self, client, db_session, moderator_headers, pr_user):
        pr_user.is_active = False
        db_session.commit()
        response = client.get("/api/v1/users/directory?role=pr", headers=moderator_headers)
        assert response.json() == []

    def test_update_own_profile(self, client, pr_headers):
        response = client.put(
            "/api/v1/users/me",
            headers=pr_headers,
            json={"full_name": "Renamed", "job_title": "Senior PR"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["full_name"] == "Renamed"
        assert data["job_title"] == "Senior PR"
        assert data["role"] == "pr"

    def test_profile_cannot_change_role(self, client, pr_headers):
        response = client.put("/api/v1/users/me", headers=pr_headers, json={"role": "admin"})
        assert response.status_code == 200
        assert response.json()["role"] == "pr"

    def test_change_password(self, client, pr_user, pr_headers):
        client.put("/api/v1/users/me", headers=pr_headers, json={"password": "newpassword1"})
        response = client.post(
            "/api/v1/auth/login",
            data={"username": pr_user.email, "password": "newpassword1"}
        )
        assert response.status_code == 200
