from datetime import date, datetime, timezone

import pytest

from api.statistics import views as statistics_views
from core.gateway import TableGateway
from db_models.asset import Asset

ASSETS = "/api/v1/assets"


async def create(client, headers, number, name="Drill", tracking_date="2025-03-01", **params):
    payload = {"asset_number": number, "name": name, "tracking_date": tracking_date}
    return await client.post(ASSETS, json=payload, headers=headers, params=params)


@pytest.mark.anyio
async def test_health(async_client):
    resp = await async_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


@pytest.mark.anyio
async def test_login_and_me(async_client):
    resp = await async_client.post("/api/v1/session/login", json={"username": "  carol "})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["username"] == "carol"
    assert body["token_type"] == "bearer"

    headers = {"Authorization": f"Bearer {body['access_token']}"}
    resp = await async_client.get("/api/v1/session/me", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"username": "carol"}


@pytest.mark.anyio
async def test_blank_login_rejected(async_client):
    resp = await async_client.post("/api/v1/session/login", json={"username": "   "})
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_assets_require_a_session(async_client):
    resp = await async_client.get(ASSETS)
    assert resp.status_code == 401

    resp = await async_client.get(ASSETS, headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


@pytest.mark.anyio
async def test_repair_lifecycle(async_client, alice_headers):
    """Create, complete, revert and delete one asset."""
    # Step 1: create
    resp = await create(async_client, alice_headers, "A1")
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["status"] == "pending"
    assert data["completed_by"] is None
    asset_id = data["id"]

    # Step 2: complete records the session operator
    resp = await async_client.post(f"{ASSETS}/{asset_id}/complete", headers=alice_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["status"] == "completed"
    assert data["completed_by"] == "alice"
    assert data["completion_date"] is not None

    # Step 3: revert clears both completion fields
    resp = await async_client.post(f"{ASSETS}/{asset_id}/revert", headers=alice_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "pending"
    assert data["completed_by"] is None
    assert data["completion_date"] is None

    # Step 4: delete
    resp = await async_client.delete(f"{ASSETS}/{asset_id}", headers=alice_headers)
    assert resp.status_code == 204
    resp = await async_client.get(f"{ASSETS}/{asset_id}", headers=alice_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_complete_by_second_operator(async_client, alice_headers, bob_headers):
    resp = await create(async_client, alice_headers, "B1")
    asset_id = resp.json()["id"]

    resp = await async_client.post(f"{ASSETS}/{asset_id}/complete", headers=bob_headers)
    assert resp.json()["completed_by"] == "bob"


@pytest.mark.anyio
async def test_edit_asset(async_client, alice_headers):
    resp = await create(async_client, alice_headers, "E1")
    asset_id = resp.json()["id"]

    resp = await async_client.put(
        f"{ASSETS}/{asset_id}",
        json={"name": "Hammer drill", "tracking_date": "2025-04-01"},
        headers=alice_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["asset_number"] == "E1"
    assert data["name"] == "Hammer drill"
    assert data["tracking_date"] == "2025-04-01"

    resp = await async_client.put(f"{ASSETS}/{asset_id}", json={"name": " "}, headers=alice_headers)
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_missing_asset_is_404(async_client, alice_headers):
    for method, path in [
        ("get", f"{ASSETS}/999"),
        ("post", f"{ASSETS}/999/complete"),
        ("post", f"{ASSETS}/999/revert"),
        ("delete", f"{ASSETS}/999"),
    ]:
        resp = await async_client.request(method.upper(), path, headers=alice_headers)
        assert resp.status_code == 404, path

    resp = await async_client.put(f"{ASSETS}/999", json={"name": "x"}, headers=alice_headers)
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_duplicate_number(async_client, alice_headers):
    assert (await create(async_client, alice_headers, "D1")).status_code == 201

    resp = await async_client.get(f"{ASSETS}/exists", params={"asset_number": "D1"}, headers=alice_headers)
    assert resp.json() == {"asset_number": "D1", "exists": True}

    resp = await create(async_client, alice_headers, "D1")
    assert resp.status_code == 409

    resp = await create(async_client, alice_headers, "D1", check_duplicate="false")
    assert resp.status_code == 201


@pytest.mark.anyio
async def test_create_validation(async_client, alice_headers):
    resp = await create(async_client, alice_headers, "")
    assert resp.status_code == 422

    resp = await async_client.post(ASSETS, json={"asset_number": "V1", "name": "Saw"}, headers=alice_headers)
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_list_pages(async_client, alice_headers):
    for i in range(12):
        await create(async_client, alice_headers, f"P-{i:02d}", tracking_date=str(date(2025, 3, 12 - i)))

    resp = await async_client.get(ASSETS, headers=alice_headers)
    assert resp.status_code == 200
    first = resp.json()
    assert first["page"] == 0
    assert first["page_size"] == 10
    assert first["total_count"] == 12
    assert first["has_more"] is True
    assert len(first["items"]) == 10
    # Ordered by tracking date
    dates = [item["tracking_date"] for item in first["items"]]
    assert dates == sorted(dates)
    assert first["items"][0]["asset_number"] == "P-11"

    resp = await async_client.get(ASSETS, params={"page": 1}, headers=alice_headers)
    second = resp.json()
    assert len(second["items"]) == 2
    assert second["has_more"] is False

    resp = await async_client.get(ASSETS, params={"page": 5}, headers=alice_headers)
    assert resp.json()["items"] == []


@pytest.mark.anyio
async def test_public_report(async_client, alice_headers):
    payload = {"asset_number": "QR-1", "name": "Chair", "tracking_date": "2025-03-01"}
    resp = await async_client.post("/api/v1/report", json=payload)
    assert resp.status_code == 201, resp.text

    # Duplicates are accepted from the report form
    resp = await async_client.post("/api/v1/report", json=payload)
    assert resp.status_code == 201

    resp = await async_client.get(ASSETS, headers=alice_headers)
    assert resp.json()["total_count"] == 2


@pytest.mark.anyio
async def test_statistics_overview(async_client, alice_headers):
    await create(async_client, alice_headers, "S1", name="Drill")
    await create(async_client, alice_headers, "S2", name="Drill")
    resp = await create(async_client, alice_headers, "S3", name="Saw")
    await async_client.post(f"{ASSETS}/{resp.json()['id']}/complete", headers=alice_headers)

    this_year = date.today().year
    resp = await async_client.get(
        "/api/v1/statistics/overview", params={"year": this_year}, headers=alice_headers
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert (body["total"], body["pending"], body["completed"]) == (3, 2, 1)
    assert body["top_items"][0] == {"name": "Drill", "count": 2, "rank": 1}
    assert body["year"] == this_year
    assert len(body["monthly"]) == 12
    assert sum(m["count"] for m in body["monthly"]) == 3


@pytest.mark.anyio
async def test_statistics_default_year(async_client, alice_headers):
    resp = await async_client.get("/api/v1/statistics/overview", headers=alice_headers)
    assert resp.status_code == 200
    assert resp.json()["year"] == 2025


@pytest.mark.anyio
async def test_completion_series_endpoint(async_client, alice_headers):
    resp = await create(async_client, alice_headers, "C1")
    await async_client.post(f"{ASSETS}/{resp.json()['id']}/complete", headers=alice_headers)

    resp = await async_client.get(
        "/api/v1/statistics/completions",
        params={"range": "month", "periods": 3},
        headers=alice_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["range"] == "month"
    assert len(body["series"]) == 3
    assert sum(p["count"] for p in body["series"]) == 1

    resp = await async_client.get(
        "/api/v1/statistics/completions", params={"range": "decade"}, headers=alice_headers
    )
    assert resp.status_code == 422


@pytest.mark.anyio
async def test_theme_preference(async_client, alice_headers, bob_headers):
    resp = await async_client.get("/api/v1/preferences/theme", headers=alice_headers)
    assert resp.json() == {"username": "alice", "dark_mode": False}

    resp = await async_client.put(
        "/api/v1/preferences/theme", json={"dark_mode": True}, headers=alice_headers
    )
    assert resp.status_code == 200
    assert resp.json()["dark_mode"] is True

    resp = await async_client.get("/api/v1/preferences/theme", headers=alice_headers)
    assert resp.json()["dark_mode"] is True
    resp = await async_client.get("/api/v1/preferences/theme", headers=bob_headers)
    assert resp.json()["dark_mode"] is False


@pytest.mark.anyio
async def test_completion_series_uses_utc_today(async_client, alice_headers, session_factory, monkeypatch):
    """The current period follows the UTC calendar, whatever the server's local date."""

    class LateEvening(datetime):
        @classmethod
        def now(cls, tz=None):
            return datetime(2025, 3, 31, 23, 30, tzinfo=timezone.utc).astimezone(tz)

    monkeypatch.setattr(statistics_views, "datetime", LateEvening)

    async with session_factory() as session:
        await TableGateway(session, Asset).insert({
            "asset_number": "U1",
            "name": "Drill",
            "tracking_date": date(2025, 3, 1),
            "status": "completed",
            "completion_date": datetime(2025, 3, 31, 23, 0, tzinfo=timezone.utc),
            "completed_by": "alice",
        })

    resp = await async_client.get(
        "/api/v1/statistics/completions", params={"range": "month"}, headers=alice_headers
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["start"] == "2025-03-01"
    assert body["end"] == "2025-04-01"
    assert body["series"] == [{"period": "2025-03", "count": 1}]
