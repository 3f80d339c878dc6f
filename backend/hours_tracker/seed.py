"""Seed script for development data.

Run with:  uv run python -m hours_tracker.seed
Inside Docker:  docker compose exec api uv run python -m hours_tracker.seed

Entries are dated relative to today so they always fall in the current year.
"""

from __future__ import annotations

import asyncio
import sys
from datetime import date, timedelta

import httpx

BASE_URL = "http://localhost:8000"
ADMIN_USER_ID = "00000000-0000-0000-0000-000000000001"

ADMIN_HEADERS = {
    "Content-Type": "application/json",
    "X-User-Id": ADMIN_USER_ID,
    "X-Role": "admin",
}

EMPLOYEES = [
    {
        "name": "John Doe",
        "identifier": "john.doe@example.com",
        "pto_rate": 0.71,
        "carryover_hours": 40,
        "hire_date": "2020-01-15",
        "role": "Employee",
    },
    {
        "name": "Jane Smith",
        "identifier": "jane.smith@example.com",
        "pto_rate": 0.71,
        "carryover_hours": 0,
        "hire_date": "2023-06-01",
        "role": "Employee",
    },
    {
        "name": "Admin User",
        "identifier": "admin@example.com",
        "pto_rate": 0.71,
        "carryover_hours": 0,
        "hire_date": "2019-03-01",
        "role": "Admin",
    },
]

# (identifier, days before today, type, hours); weekend dates are moved to Friday.
ENTRIES = [
    ("john.doe@example.com", 60, "PTO", 8),
    ("john.doe@example.com", 45, "Sick", 8),
    ("john.doe@example.com", 30, "PTO", 4),
    ("jane.smith@example.com", 20, "Sick", 8),
    ("jane.smith@example.com", 10, "Jury Duty", 8),
]

# (identifier, days from today, total hours) for multi-day PTO requests.
RANGES = [
    ("jane.smith@example.com", -90, 24),
]


def _employee_headers(employee_id: str) -> dict[str, str]:
    return {"Content-Type": "application/json", "X-User-Id": employee_id, "X-Role": "employee"}


def _previous_weekday(day: date) -> date:
    while day.weekday() >= 5:
        day -= timedelta(days=1)
    return day


async def _safe_post(
    client: httpx.AsyncClient,
    url: str,
    json: dict,
    label: str,
    headers: dict[str, str] = ADMIN_HEADERS,
) -> dict | None:
    """POST tolerating conflicts and duplicate-entry rejections from earlier runs."""
    resp = await client.post(url, json=json, headers=headers)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    if resp.status_code == 409 or (resp.status_code == 400 and resp.json().get("message_key") == "pto.duplicate"):
        print(f"  [SKIP] {label} (already exists)")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_employees(client: httpx.AsyncClient) -> dict[str, str]:
    """Create employees and return an identifier->id mapping."""
    print("\n--- Seeding employees ---")
    for employee in EMPLOYEES:
        await _safe_post(client, f"{BASE_URL}/employees", employee, f"Employee: {employee['name']}")

    resp = await client.get(f"{BASE_URL}/employees", headers=ADMIN_HEADERS)
    resp.raise_for_status()
    return {item["identifier"]: item["id"] for item in resp.json()["items"]}


async def seed_entries(client: httpx.AsyncClient, employee_ids: dict[str, str]) -> list[str]:
    """Seed single-day entries and return the ids that were created."""
    print("\n--- Seeding PTO entries ---")
    today = date.today()
    created: list[str] = []
    for identifier, days_ago, pto_type, hours in ENTRIES:
        employee_id = employee_ids[identifier]
        entry_date = _previous_weekday(today - timedelta(days=days_ago))
        if entry_date.year != today.year:
            print(f"  [SKIP] {identifier} {pto_type} on {entry_date} (previous year)")
            continue
        result = await _safe_post(
            client,
            f"{BASE_URL}/employees/{employee_id}/pto-entries",
            {"date": entry_date.isoformat(), "type": pto_type, "hours": hours},
            f"{identifier} {pto_type} {hours}h on {entry_date}",
            headers=_employee_headers(employee_id),
        )
        if result:
            created.append(result["id"])

    for identifier, offset, hours in RANGES:
        employee_id = employee_ids[identifier]
        start = today + timedelta(days=offset)
        if start.year != today.year:
            continue
        await _safe_post(
            client,
            f"{BASE_URL}/employees/{employee_id}/pto-entries/range",
            {"start": start.isoformat(), "type": "PTO", "hours": hours},
            f"{identifier} PTO {hours}h from {start}",
            headers=_employee_headers(employee_id),
        )
    return created


async def approve_entries(client: httpx.AsyncClient, entry_ids: list[str]) -> None:
    """Approve the first half of the seeded entries so the review queue is not empty."""
    print("\n--- Approving entries ---")
    for entry_id in entry_ids[: len(entry_ids) // 2]:
        resp = await client.post(f"{BASE_URL}/pto-entries/{entry_id}/approve", headers=ADMIN_HEADERS)
        if resp.status_code == 200:
            print(f"  [OK] Approved {entry_id[:8]}...")
        else:
            print(f"  [ERROR] Approving {entry_id[:8]}...: {resp.status_code}")


async def seed_prior_month(client: httpx.AsyncClient, employee_ids: dict[str, str]) -> None:
    """Report hours and acknowledge last month for every non-admin employee."""
    print("\n--- Seeding prior month ---")
    last_month = (date.today().replace(day=1) - timedelta(days=1)).strftime("%Y-%m")
    for employee in EMPLOYEES:
        if employee["role"] == "Admin":
            continue
        employee_id = employee_ids[str(employee["identifier"])]
        headers = _employee_headers(employee_id)
        await _safe_post(
            client,
            f"{BASE_URL}/employees/{employee_id}/monthly-hours",
            {"month": last_month, "hours_worked": 160},
            f"{employee['name']} hours for {last_month}",
            headers=headers,
        )
        await _safe_post(
            client,
            f"{BASE_URL}/employees/{employee_id}/acknowledgements",
            {"month": last_month, "status": "confirmed"},
            f"{employee['name']} acknowledged {last_month}",
            headers=headers,
        )


async def main() -> None:
    print("=" * 60)
    print("  Hours Tracker: Development Seed Script")
    print("=" * 60)

    async with httpx.AsyncClient(timeout=30.0) as client:
        try:
            resp = await client.get(f"{BASE_URL}/health")
            if resp.status_code != 200:
                print(f"API health check failed: {resp.status_code}")
                sys.exit(1)
            print("\n[OK] API is healthy")
        except httpx.ConnectError:
            print("ERROR: Cannot connect to API at", BASE_URL)
            print("Make sure the API is running (make up)")
            sys.exit(1)

        employee_ids = await seed_employees(client)
        entry_ids = await seed_entries(client, employee_ids)
        await approve_entries(client, entry_ids)
        await seed_prior_month(client, employee_ids)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
