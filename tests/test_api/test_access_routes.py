"""HTTP tests for the access-decision endpoints."""

import pytest


def test_anonymous_gets_false_not_401(client):
    response = client.get("/access/routes", params={"path": "/dashboard"})
    assert response.status_code == 200
    assert response.json() == {"target": "/dashboard", "allowed": False}


@pytest.mark.parametrize(
    ("path", "allowed"),
    [("/employees", False), ("/dashboard", True), ("/payroll", False), ("/analytics", False)],
)
def test_route_decisions_for_employee(client, login, path, allowed):
    login("employee@example.com")
    assert client.get("/access/routes", params={"path": path}).json()["allowed"] is allowed


def test_operation_decisions(client, login):
    login("hr@example.com")
    assert client.get("/access/operations/mark:attendance").json()["allowed"] is True
    assert client.get("/access/operations/delete:employee").json()["allowed"] is False
    assert client.get("/access/operations/unmapped:op").json()["allowed"] is False


def test_permission_decisions(client, login):
    login("admin@example.com")
    assert client.get("/access/permissions/anything:at:all").json() == {
        "target": "anything:at:all",
        "allowed": True,
    }
