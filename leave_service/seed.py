"""Seed script for development data.

Run with:  python -m leave_service.seed
Talks to a running API, so every record goes through the same rules as
real traffic. Re-running is safe: existing users and pending requests are
reported as skipped.
"""

from __future__ import annotations

import asyncio
import os
import sys
from datetime import UTC, datetime, timedelta

import httpx

BASE_URL = os.environ.get("SEED_BASE_URL", "http://localhost:8000")
SEED_PASSWORD = "password123"

ADMIN_EMAIL = "admin@example.com"

USERS = [
    {"email": ADMIN_EMAIL, "full_name": "Admin User", "role": "admin"},
    {"email": "john.doe@example.com", "full_name": "John Doe", "role": "employee"},
    {"email": "jane.smith@example.com", "full_name": "Jane Smith", "role": "employee"},
]


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _window(days_ahead: int, length_days: int) -> tuple[str, str]:
    start = (datetime.now(UTC) + timedelta(days=days_ahead)).replace(hour=9, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=length_days)
    return start.isoformat(), end.isoformat()


async def _safe_post(
    client: httpx.AsyncClient,
    url: str,
    json: dict,
    label: str,
    headers: dict[str, str] | None = None,
) -> dict | None:
    """POST with 409-conflict tolerance so the script can be re-run."""
    resp = await client.post(url, json=json, headers=headers)
    if resp.status_code in (200, 201):
        print(f"  [OK] {label}")
        return resp.json()
    if resp.status_code == 409:
        print(f"  [SKIP] {label} (already exists)")
        return None
    print(f"  [ERROR] {label}: {resp.status_code} {resp.text[:200]}")
    return None


async def seed_users(client: httpx.AsyncClient) -> dict[str, str]:
    """Register users and log each one in. Returns email -> token."""
    print("\n--- Seeding users ---")
    tokens: dict[str, str] = {}
    for user in USERS:
        await _safe_post(
            client,
            f"{BASE_URL}/auth/register",
            {**user, "password": SEED_PASSWORD},
            f"User: {user['email']} ({user['role']})",
        )
        resp = await client.post(
            f"{BASE_URL}/auth/login",
            json={"email": user["email"], "password": SEED_PASSWORD},
        )
        if resp.status_code != 200:
            print(f"  [ERROR] Login {user['email']}: {resp.status_code}")
            continue
        tokens[user["email"]] = resp.json()["token"]
    return tokens


async def seed_leave_requests(client: httpx.AsyncClient, tokens: dict[str, str]) -> None:
    """John gets one approved and one pending request; Jane gets one pending request."""
    print("\n--- Seeding leave requests ---")
    admin_token = tokens.get(ADMIN_EMAIL)
    john_token = tokens.get("john.doe@example.com")
    jane_token = tokens.get("jane.smith@example.com")
    if admin_token is None or john_token is None or jane_token is None:
        print("  [ERROR] Missing tokens, skipping leave requests")
        return

    start, end = _window(days_ahead=14, length_days=4)
    first = await _safe_post(
        client,
        f"{BASE_URL}/leave-requests",
        {"start_date": start, "end_date": end, "reason": "Personal time off"},
        "Request: John personal time off",
        headers=_bearer(john_token),
    )
    if first:
        resp = await client.patch(
            f"{BASE_URL}/admin/leave-requests/{first['id']}/approve",
            json={"admin_comment": "Approved - enjoy your time off!"},
            headers=_bearer(admin_token),
        )
        if resp.status_code == 200:
            print("  [OK] Approved John's personal time off")
        elif resp.status_code == 409:
            print("  [SKIP] John's request already decided")
        else:
            print(f"  [ERROR] Approving John's request: {resp.status_code}")

    start, end = _window(days_ahead=60, length_days=7)
    await _safe_post(
        client,
        f"{BASE_URL}/leave-requests",
        {"start_date": start, "end_date": end, "reason": "Year-end vacation with family"},
        "Request: John year-end vacation (pending)",
        headers=_bearer(john_token),
    )

    start, end = _window(days_ahead=45, length_days=7)
    await _safe_post(
        client,
        f"{BASE_URL}/leave-requests",
        {"start_date": start, "end_date": end, "reason": "Visiting relatives abroad"},
        "Request: Jane visiting relatives (pending)",
        headers=_bearer(jane_token),
    )


async def main() -> None:
    print("=" * 60)
    print("  Leave Request Service - Development Seed Script")
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
            print("Make sure the API is running (uvicorn leave_service.main:app)")
            sys.exit(1)

        tokens = await seed_users(client)
        await seed_leave_requests(client, tokens)

    print("\n" + "=" * 60)
    print("  Seeding complete!")
    print(f"  All seeded users share the password: {SEED_PASSWORD}")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
