"""HTTP tests for the route guard and user administration."""


def test_admin_routes_need_a_session(client):
    assert client.get("/admin/users").status_code == 401


def test_route_guard_denies_hr(client, login):
    login("hr@example.com")
    response = client.get("/admin/users")
    assert response.status_code == 403
    assert response.json() == {"detail": "Access denied"}


def test_admin_lists_non_admin_users(client, login):
    login("admin@example.com")
    response = client.get("/admin/users")
    assert response.status_code == 200
    assert [u["role"] for u in response.json()] == ["hr", "manager", "employee"]


def test_admin_creates_updates_and_deletes_user(client, login):
    login("admin@example.com")

    created = client.post(
        "/admin/users",
        json={"email": "new@x.com", "password": "pw", "name": "New Person", "role": "manager"},
    )
    assert created.status_code == 201
    user = created.json()
    assert set(user["permissions"]) == {
        "employees:read",
        "performance:read",
        "performance:write:team",
        "analytics:read:basic",
    }

    duplicate = client.post(
        "/admin/users",
        json={"email": "new@x.com", "password": "pw", "name": "Again", "role": "hr"},
    )
    assert duplicate.status_code == 409

    patched = client.patch(f"/admin/users/{user['id']}", json={"name": "Renamed"})
    assert patched.status_code == 200
    assert patched.json()["name"] == "Renamed"

    assert client.delete(f"/admin/users/{user['id']}").status_code == 204
    assert client.delete(f"/admin/users/{user['id']}").status_code == 404


def test_cannot_create_admin_over_http(client, login):
    login("admin@example.com")
    response = client.post(
        "/admin/users",
        json={"email": "boss@x.com", "password": "pw", "name": "Boss", "role": "admin"},
    )
    assert response.status_code == 422


def test_role_is_not_patchable(client, login):
    login("admin@example.com")
    assert client.patch("/admin/users/4", json={"role": "admin"}).status_code == 422


def test_admin_account_cannot_be_deleted(client, login):
    login("admin@example.com")
    response = client.delete("/admin/users/1")
    assert response.status_code == 403
    assert response.json() == {"detail": "Cannot delete administrator account"}


def test_system_overview_admin_only(client, login):
    login("admin@example.com")
    response = client.get("/admin/system")
    assert response.status_code == 200
    assert response.json()["operations"] >= 1

    login("manager@example.com")
    assert client.get("/admin/system").status_code == 403


def test_blank_email_patch_rejected(client, login):
    login("admin@example.com")
    assert client.patch("/admin/users/3", json={"email": ""}).status_code == 422
    assert client.get("/admin/users").json()[1]["email"] == "manager@example.com"
