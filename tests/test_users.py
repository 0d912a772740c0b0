"""
Test: admin user management.
"""
from tests.conftest import ADMIN, STUDENT


def create(client, **overrides):
    payload = {"email": "teach@example.com", "password": "secret123", "fullName": "Tess Teacher", "role": "teacher"}
    payload.update(overrides)
    return client.post("/api/admin/users/", json=payload)


class TestUserAdmin:
    def test_create_and_list(self, act_as):
        client = act_as(ADMIN)
        response = create(client)
        assert response.status_code == 201
        assert response.json()["role"] == "teacher"

        body = client.get("/api/admin/users/", params={"role": "teacher"}).json()
        assert body["total"] == 1
        assert body["users"][0]["email"] == "teach@example.com"
        assert "password" not in body["users"][0]

    def test_duplicate_email(self, act_as):
        client = act_as(ADMIN)
        create(client)
        assert create(client, email="TEACH@example.com").status_code == 400

    def test_invalid_role_filter(self, act_as):
        client = act_as(ADMIN)
        assert client.get("/api/admin/users/", params={"role": "parent"}).status_code == 400

    def test_search(self, act_as):
        client = act_as(ADMIN)
        create(client)
        create(client, email="other@example.com", fullName="Omar Other", role="student")
        body = client.get("/api/admin/users/", params={"search": "omar"}).json()
        assert [u["email"] for u in body["users"]] == ["other@example.com"]

    def test_update_and_toggle(self, act_as):
        client = act_as(ADMIN)
        user = create(client).json()
        response = client.put(f"/api/admin/users/{user['id']}", json={"fullName": "Renamed", "role": "admin"})
        assert response.status_code == 200
        assert response.json()["fullName"] == "Renamed"
        assert response.json()["role"] == "admin"

        toggled = client.patch(f"/api/admin/users/{user['id']}/toggle-status").json()
        assert toggled["isActive"] is False
        toggled = client.patch(f"/api/admin/users/{user['id']}/toggle-status").json()
        assert toggled["isActive"] is True

    def test_delete(self, act_as):
        client = act_as(ADMIN)
        user = create(client).json()
        assert client.delete(f"/api/admin/users/{user['id']}").status_code == 200
        assert client.delete(f"/api/admin/users/{user['id']}").status_code == 404

    def test_cannot_delete_self(self, act_as):
        client = act_as(ADMIN)
        assert client.delete(f"/api/admin/users/{ADMIN['id']}").status_code == 400

    def test_students_denied(self, act_as):
        client = act_as(STUDENT)
        assert client.get("/api/admin/users/").status_code == 403
