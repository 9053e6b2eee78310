"""
Integration tests for the organization audit log endpoint.
"""

import pytest

from freightbid.seed_users import seed_users


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
async def test_audit_logs_list_own_organization_newest_first(client, analyst_token):
    await client.post("/v1/auth/login", json={"username": "acme_analyst", "password": "not-it"})
    await client.post("/v1/auth/register", json={
        "email": "boss@northwind.com",
        "username": "nw_manager",
        "password": "password123",
        "role": "MANAGER",
        "organization_name": "Northwind Logistics"
    })

    response = await client.get("/v1/audit-logs", headers=auth(analyst_token))

    assert response.status_code == 200
    data = response.json()
    assert [log["action"] for log in data["logs"]] == ["LOGIN_FAILED", "USER_CREATED"]
    assert data["total"] == 2
    assert data["logs"][0]["meta_data"] == {"reason": "Invalid password"}
    assert data["logs"][1]["actor_username"] == "acme_analyst"


@pytest.mark.asyncio
async def test_audit_logs_limit_and_offset(client, analyst_token):
    await client.post("/v1/auth/login", json={"username": "acme_analyst", "password": "password123"})

    response = await client.get(
        "/v1/audit-logs", params={"limit": 1, "offset": 1}, headers=auth(analyst_token)
    )

    assert response.status_code == 200
    assert [log["action"] for log in response.json()["logs"]] == ["USER_CREATED"]


@pytest.mark.asyncio
async def test_audit_logs_filter_by_action(client, analyst_token):
    await client.post("/v1/auth/login", json={"username": "acme_analyst", "password": "password123"})

    response = await client.get(
        "/v1/audit-logs", params={"action": "USER_CREATED"}, headers=auth(analyst_token)
    )

    assert [log["action"] for log in response.json()["logs"]] == ["USER_CREATED"]


@pytest.mark.asyncio
async def test_audit_logs_reject_invalid_limit(client, analyst_token):
    response = await client.get("/v1/audit-logs", params={"limit": 0}, headers=auth(analyst_token))

    assert response.status_code == 422
    assert response.json()["error_code"] == "ERR_VALIDATION"


@pytest.mark.asyncio
async def test_audit_logs_require_organization_member(client, session_factory):
    await seed_users(session_factory)
    login = await client.post("/v1/auth/login", json={"username": "admin", "password": "admin123"})

    response = await client.get("/v1/audit-logs", headers=auth(login.json()["access_token"]))

    assert response.status_code == 403
