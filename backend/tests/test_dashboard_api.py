"""Dashboard summary endpoint tests."""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from cms.db.models import BlogPost, Partner, Project
from tests.conftest import FakeRedis

pytestmark = pytest.mark.asyncio

DASHBOARD_URL = "/api/v1/dashboard"


async def test_requires_authentication(client: AsyncClient):
    resp = await client.get(DASHBOARD_URL)
    assert resp.status_code == 401


async def test_requires_editor_role(client: AsyncClient, hr_headers: dict[str, str]):
    resp = await client.get(DASHBOARD_URL, headers=hr_headers)
    assert resp.status_code == 403


async def test_counts_active_rows_per_type(
    client: AsyncClient,
    test_db: AsyncSession,
    editor_headers: dict[str, str],
    existing_project: Project,
):
    test_db.add_all([
        Project(title="Archived", slug="archived", is_active=False),
        BlogPost(title="Hello", slug="hello"),
        BlogPost(title="World", slug="world"),
        Partner(title="Acme", slug="acme"),
    ])
    await test_db.commit()

    resp = await client.get(DASHBOARD_URL, headers=editor_headers)
    assert resp.status_code == 200

    data = resp.json()["data"]
    assert data["counts"] == {
        "project": 1,
        "blog": 2,
        "career": 0,
        "category": 0,
        "career-category": 0,
        "partner": 1,
    }
    assert data["total"] == 4


async def test_summary_cached(
    client: AsyncClient,
    test_db: AsyncSession,
    editor_headers: dict[str, str],
    fake_redis: FakeRedis,
):
    first = (await client.get(DASHBOARD_URL, headers=editor_headers)).json()["data"]
    assert "dashboard:summary" in fake_redis.store

    test_db.add(BlogPost(title="Unseen", slug="unseen"))
    await test_db.commit()

    second = (await client.get(DASHBOARD_URL, headers=editor_headers)).json()["data"]
    assert second == first
    assert second["total"] == 0


async def test_project_create_refreshes_summary(
    client: AsyncClient,
    editor_headers: dict[str, str],
):
    before = (await client.get(DASHBOARD_URL, headers=editor_headers)).json()["data"]
    await client.post("/api/v1/projects", json={"title": "Counted"}, headers=editor_headers)
    after = (await client.get(DASHBOARD_URL, headers=editor_headers)).json()["data"]

    assert before["counts"]["project"] == 0
    assert after["counts"]["project"] == 1
