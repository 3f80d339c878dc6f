"""Integration tests for the employee API (create, get, list, update, delete)."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select
from sqlmodel import col

from hours_tracker.models.audit import AuditLog
from hours_tracker.models.pto_entry import PtoEntry

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

ADMIN_ID = uuid.uuid4()
ADMIN_HEADERS = {"X-User-Id": str(ADMIN_ID), "X-Role": "admin"}


def _employee_payload(**overrides: Any) -> dict:
    payload = {
        "name": "John Doe",
        "identifier": "john.doe@example.com",
        "pto_rate": 0.71,
        "carryover_hours": 40,
        "hire_date": "2020-01-15",
        "role": "Employee",
    }
    payload.update(overrides)
    return payload


def _employee_headers(employee_id: str) -> dict[str, str]:
    return {"X-User-Id": employee_id, "X-Role": "employee"}


async def _create(client: AsyncClient, **overrides: Any) -> dict:
    resp = await client.post("/employees", json=_employee_payload(**overrides), headers=ADMIN_HEADERS)
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------


async def test_create_employee(async_client: AsyncClient) -> None:
    data = await _create(async_client)
    assert uuid.UUID(data["id"])
    assert data["name"] == "John Doe"
    assert data["identifier"] == "john.doe@example.com"
    assert data["pto_rate"] == 0.71
    assert data["carryover_hours"] == 40
    assert data["hire_date"] == "2020-01-15"
    assert data["role"] == "Employee"
    assert "created_at" in data


async def test_create_employee_defaults(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        "/employees",
        json={"name": "Jane Smith", "identifier": "jane@example.com", "hire_date": "2023-06-01"},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["pto_rate"] == 0.71
    assert data["carryover_hours"] == 0
    assert data["role"] == "Employee"


async def test_create_employee_duplicate_identifier(async_client: AsyncClient) -> None:
    await _create(async_client)
    resp = await async_client.post("/employees", json=_employee_payload(name="Other"), headers=ADMIN_HEADERS)
    assert resp.status_code == 409


async def test_create_employee_requires_admin(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        "/employees", json=_employee_payload(), headers=_employee_headers(str(uuid.uuid4()))
    )
    assert resp.status_code == 403


async def test_create_employee_rejects_negative_carryover(async_client: AsyncClient) -> None:
    resp = await async_client.post("/employees", json=_employee_payload(carryover_hours=-8), headers=ADMIN_HEADERS)
    assert resp.status_code == 422


async def test_create_employee_rejects_unknown_role(async_client: AsyncClient) -> None:
    resp = await async_client.post("/employees", json=_employee_payload(role="Manager"), headers=ADMIN_HEADERS)
    assert resp.status_code == 422


async def test_create_employee_is_audited(async_client: AsyncClient, db_session: AsyncSession) -> None:
    data = await _create(async_client)
    result = await db_session.execute(select(AuditLog).where(col(AuditLog.entity_id) == uuid.UUID(data["id"])))
    audit = result.scalar_one()
    assert audit.action == "CREATE"
    assert audit.entity_type == "EMPLOYEE"
    assert audit.actor_id == ADMIN_ID
    assert audit.before_json is None
    assert audit.after_json["identifier"] == "john.doe@example.com"


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------


async def test_get_employee_as_self(async_client: AsyncClient) -> None:
    created = await _create(async_client)
    resp = await async_client.get(f"/employees/{created['id']}", headers=_employee_headers(created["id"]))
    assert resp.status_code == 200
    assert resp.json()["id"] == created["id"]


async def test_get_employee_as_other_employee(async_client: AsyncClient) -> None:
    created = await _create(async_client)
    resp = await async_client.get(f"/employees/{created['id']}", headers=_employee_headers(str(uuid.uuid4())))
    assert resp.status_code == 403


async def test_get_employee_not_found(async_client: AsyncClient) -> None:
    resp = await async_client.get(f"/employees/{uuid.uuid4()}", headers=ADMIN_HEADERS)
    assert resp.status_code == 404


async def test_get_employee_requires_user_header(async_client: AsyncClient) -> None:
    resp = await async_client.get(f"/employees/{uuid.uuid4()}")
    assert resp.status_code == 422


async def test_role_header_is_case_insensitive(async_client: AsyncClient) -> None:
    created = await _create(async_client)
    resp = await async_client.get(
        f"/employees/{created['id']}", headers={"X-User-Id": str(uuid.uuid4()), "X-Role": "Admin"}
    )
    assert resp.status_code == 200


async def test_list_employees_sorted_by_name(async_client: AsyncClient) -> None:
    await _create(async_client, name="Zoe Young", identifier="zoe@example.com")
    await _create(async_client, name="Adam Brown", identifier="adam@example.com")
    resp = await async_client.get("/employees", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert [item["name"] for item in data["items"]] == ["Adam Brown", "Zoe Young"]


async def test_list_employees_requires_admin(async_client: AsyncClient) -> None:
    resp = await async_client.get("/employees", headers=_employee_headers(str(uuid.uuid4())))
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------


async def test_update_employee(async_client: AsyncClient) -> None:
    created = await _create(async_client)
    resp = await async_client.patch(
        f"/employees/{created['id']}",
        json={"pto_rate": 0.8, "role": "Admin"},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["pto_rate"] == 0.8
    assert data["role"] == "Admin"
    assert data["name"] == "John Doe"


async def test_update_employee_empty_payload_is_noop(async_client: AsyncClient, db_session: AsyncSession) -> None:
    created = await _create(async_client)
    resp = await async_client.patch(f"/employees/{created['id']}", json={}, headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert resp.json()["pto_rate"] == 0.71

    count = await db_session.scalar(select(func.count()).select_from(AuditLog).where(col(AuditLog.action) == "UPDATE"))
    assert count == 0


async def test_update_employee_identifier_conflict(async_client: AsyncClient) -> None:
    await _create(async_client, identifier="taken@example.com")
    created = await _create(async_client)
    resp = await async_client.patch(
        f"/employees/{created['id']}", json={"identifier": "taken@example.com"}, headers=ADMIN_HEADERS
    )
    assert resp.status_code == 409


async def test_update_employee_requires_admin(async_client: AsyncClient) -> None:
    created = await _create(async_client)
    resp = await async_client.patch(
        f"/employees/{created['id']}", json={"carryover_hours": 80}, headers=_employee_headers(created["id"])
    )
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


async def test_delete_employee_removes_entries(async_client: AsyncClient, db_session: AsyncSession) -> None:
    created = await _create(async_client)
    resp = await async_client.post(
        f"/employees/{created['id']}/pto-entries",
        json={"date": "2026-03-02", "type": "Sick", "hours": 8},
        headers=_employee_headers(created["id"]),
    )
    assert resp.status_code == 201

    resp = await async_client.delete(f"/employees/{created['id']}", headers=ADMIN_HEADERS)
    assert resp.status_code == 204

    resp = await async_client.get(f"/employees/{created['id']}", headers=ADMIN_HEADERS)
    assert resp.status_code == 404
    remaining = await db_session.scalar(select(func.count()).select_from(PtoEntry))
    assert remaining == 0


async def test_delete_employee_not_found(async_client: AsyncClient) -> None:
    resp = await async_client.delete(f"/employees/{uuid.uuid4()}", headers=ADMIN_HEADERS)
    assert resp.status_code == 404
