"""Tests for employee month acknowledgements and admin month locks."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import select
from sqlmodel import col

from hours_tracker.models.audit import AuditLog

if TYPE_CHECKING:
    from httpx import AsyncClient
    from sqlalchemy.ext.asyncio import AsyncSession

ADMIN_ID = uuid.uuid4()
ADMIN_HEADERS = {"X-User-Id": str(ADMIN_ID), "X-Role": "admin"}


def _headers(employee: dict) -> dict[str, str]:
    return {"X-User-Id": employee["id"], "X-Role": "employee"}


@pytest.fixture
async def employee(async_client: AsyncClient) -> dict:
    resp = await async_client.post(
        "/employees",
        json={"name": "John Doe", "identifier": "john.doe@example.com", "hire_date": "2020-01-15"},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 201
    return resp.json()


async def _acknowledge(client: AsyncClient, employee: dict, month: str, **extra: str) -> dict:
    resp = await client.post(
        f"/employees/{employee['id']}/acknowledgements",
        json={"month": month, **extra},
        headers=_headers(employee),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# Employee acknowledgements
# ---------------------------------------------------------------------------


async def test_acknowledge_month(async_client: AsyncClient, employee: dict) -> None:
    data = await _acknowledge(async_client, employee, "2026-02")
    assert data["month"] == "2026-02"
    assert data["status"] == "confirmed"
    assert data["note"] is None
    assert data["acknowledged_at"]


async def test_acknowledge_with_warning_note(async_client: AsyncClient, employee: dict) -> None:
    data = await _acknowledge(async_client, employee, "2026-02", status="warning", note="Missing a sick day")
    assert data["status"] == "warning"
    assert data["note"] == "Missing a sick day"


async def test_acknowledge_month_once(async_client: AsyncClient, employee: dict) -> None:
    await _acknowledge(async_client, employee, "2026-02")
    resp = await async_client.post(
        f"/employees/{employee['id']}/acknowledgements", json={"month": "2026-02"}, headers=_headers(employee)
    )
    assert resp.status_code == 400
    assert resp.json()["message_key"] == "month.already_acknowledged"


async def test_acknowledge_rejects_unknown_status(async_client: AsyncClient, employee: dict) -> None:
    resp = await async_client.post(
        f"/employees/{employee['id']}/acknowledgements",
        json={"month": "2026-02", "status": "maybe"},
        headers=_headers(employee),
    )
    assert resp.status_code == 422


async def test_list_acknowledgements(async_client: AsyncClient, employee: dict) -> None:
    await _acknowledge(async_client, employee, "2026-02")
    await _acknowledge(async_client, employee, "2026-01")
    resp = await async_client.get(f"/employees/{employee['id']}/acknowledgements", headers=_headers(employee))
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert [item["month"] for item in data["items"]] == ["2026-01", "2026-02"]


async def test_acknowledge_for_other_employee_forbidden(async_client: AsyncClient, employee: dict) -> None:
    resp = await async_client.post(
        f"/employees/{employee['id']}/acknowledgements",
        json={"month": "2026-02"},
        headers={"X-User-Id": str(uuid.uuid4()), "X-Role": "employee"},
    )
    assert resp.status_code == 403


# ---------------------------------------------------------------------------
# Admin locks
# ---------------------------------------------------------------------------


async def test_lock_month(async_client: AsyncClient, employee: dict, db_session: AsyncSession) -> None:
    await _acknowledge(async_client, employee, "2026-02")
    resp = await async_client.post(
        f"/employees/{employee['id']}/admin-acknowledgements", json={"month": "2026-02"}, headers=ADMIN_HEADERS
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["month"] == "2026-02"
    assert data["admin_id"] == str(ADMIN_ID)

    resp = await async_client.get(f"/employees/{employee['id']}/admin-acknowledgements", headers=_headers(employee))
    assert resp.json()["total"] == 1

    result = await db_session.execute(select(AuditLog).where(col(AuditLog.action) == "LOCK"))
    audit = result.scalar_one()
    assert audit.entity_type == "ADMIN_ACKNOWLEDGEMENT"
    assert audit.actor_id == ADMIN_ID


async def test_lock_month_requires_acknowledgement(async_client: AsyncClient, employee: dict) -> None:
    resp = await async_client.post(
        f"/employees/{employee['id']}/admin-acknowledgements", json={"month": "2026-02"}, headers=ADMIN_HEADERS
    )
    assert resp.status_code == 400
    assert resp.json()["message_key"] == "employee.not_acknowledged"


async def test_lock_month_requires_month_to_have_ended(async_client: AsyncClient, employee: dict) -> None:
    await _acknowledge(async_client, employee, "2026-03")
    resp = await async_client.post(
        f"/employees/{employee['id']}/admin-acknowledgements", json={"month": "2026-03"}, headers=ADMIN_HEADERS
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["message_key"] == "month.not_ended"
    assert "2026-04-01" in body["detail"]


async def test_lock_month_twice_conflicts(async_client: AsyncClient, employee: dict) -> None:
    await _acknowledge(async_client, employee, "2026-02")
    url = f"/employees/{employee['id']}/admin-acknowledgements"
    await async_client.post(url, json={"month": "2026-02"}, headers=ADMIN_HEADERS)
    resp = await async_client.post(url, json={"month": "2026-02"}, headers=ADMIN_HEADERS)
    assert resp.status_code == 409


async def test_lock_month_requires_admin(async_client: AsyncClient, employee: dict) -> None:
    await _acknowledge(async_client, employee, "2026-02")
    resp = await async_client.post(
        f"/employees/{employee['id']}/admin-acknowledgements", json={"month": "2026-02"}, headers=_headers(employee)
    )
    assert resp.status_code == 403


async def test_lock_unknown_employee(async_client: AsyncClient) -> None:
    resp = await async_client.post(
        f"/employees/{uuid.uuid4()}/admin-acknowledgements", json={"month": "2026-02"}, headers=ADMIN_HEADERS
    )
    assert resp.status_code == 404


async def test_summary_reports_lock(async_client: AsyncClient, employee: dict) -> None:
    await _acknowledge(async_client, employee, "2026-02")
    await async_client.post(
        f"/employees/{employee['id']}/admin-acknowledgements", json={"month": "2026-02"}, headers=ADMIN_HEADERS
    )
    resp = await async_client.get(
        f"/employees/{employee['id']}/monthly-summary", params={"month": "2026-02"}, headers=_headers(employee)
    )
    assert resp.json()["locked"] is True
