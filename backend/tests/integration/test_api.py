"""End-to-end tests for the HTTP API against a throwaway SQLite store."""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient

from practice_log.config import Settings
from practice_log.infrastructure.dependencies import get_record_query_service
from practice_log.main import create_app


async def _submit(client: AsyncClient, **body) -> str:
    response = await client.post("/api/submit", json=body)
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    return data["recordId"]


@pytest.mark.asyncio
async def test_health_check_returns_200(client):
    """Health endpoint should return 200 with status, version, and environment."""
    response = await client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "homework-collection-system"
    assert "version" in data
    assert "environment" in data
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_health_check_reports_unreachable_store(tmp_path):
    settings = Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}",
        database_name="",
        app_env="test",
        eager_connect=False,
    )
    app = create_app(settings)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        health = await http.get("/api/health")
        records = await http.get("/api/records")

    assert health.status_code == 503
    assert health.json()["status"] == "unhealthy"
    assert records.status_code == 503
    assert records.json()["success"] is False


@pytest.mark.asyncio
async def test_config_is_static(client):
    response = await client.get("/api/config")

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["version"] == "1.0.0"
    assert "submit" in data["features"]


@pytest.mark.asyncio
async def test_submit_then_stats(client):
    await _submit(client, name="A", date="2024-01-01", diamond=3, amitabha=2)

    response = await client.get("/api/stats")

    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["totalRecords"] == 1
    assert stats["totalClassics"] == 5
    assert stats["classicsStats"]["totalDiamond"] == 3
    assert stats["classicsStats"]["totalAmitabha"] == 2
    assert [(s["submitterName"], s["count"]) for s in stats["nameStats"]] == [("A", 1)]


@pytest.mark.asyncio
async def test_stats_counts_todays_records(client):
    await _submit(client, submitterName="A", date=date.today().isoformat())
    await _submit(client, submitterName="B", date="2000-01-01")

    stats = (await client.get("/api/stats")).json()["stats"]

    assert stats["totalRecords"] == 2
    assert stats["todayRecords"] == 1


@pytest.mark.asyncio
async def test_submit_coerces_counters_and_records_provenance(client):
    record_id = await _submit(
        client, submitterName="B", diamond="12abc", guanyin="x", extraNote="hi", sourceIp="1.2.3.4"
    )

    response = await client.get(f"/api/records/{record_id}")
    record = response.json()["data"]
    assert record["diamond"] == 12
    assert record["guanyin"] == 0
    assert record["extraNote"] == "hi"
    assert record["sourceIp"] != "1.2.3.4"
    assert record["storageMode"] == "both"


@pytest.mark.asyncio
async def test_records_listing_envelope_and_pagination(client):
    for name in ["A", "B", "C"]:
        await _submit(client, submitterName=name, date="2024-01-01")

    response = await client.get("/api/records", params={"page": 2, "limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert len(body["data"]) == 1
    assert body["pagination"] == {"page": 2, "limit": 2, "totalCount": 3, "totalPages": 2}


@pytest.mark.asyncio
async def test_records_search_and_sort(client):
    await _submit(client, submitterName="Alice", diamond=1)
    await _submit(client, submitterName="Bob", diamond=5, remark="with alice")
    await _submit(client, submitterName="Carol", diamond=3)

    response = await client.get(
        "/api/records", params={"search": "ALICE", "sortBy": "diamond", "sortOrder": "asc"}
    )

    body = response.json()
    assert [r["submitterName"] for r in body["data"]] == ["Alice", "Bob"]
    assert body["pagination"]["totalCount"] == 2


@pytest.mark.asyncio
async def test_records_rejects_unknown_sort_field(client):
    response = await client.get("/api/records", params={"sortBy": "password"})

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_records_rejects_page_zero(client):
    response = await client.get("/api/records", params={"page": 0})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_update_then_fetch(client):
    record_id = await _submit(client, submitterName="A", diamond=1)

    response = await client.put("/api/update", json={"id": record_id, "diamond": "7", "remark": "r"})

    assert response.status_code == 200
    assert response.json()["modifiedCount"] == 1
    record = (await client.get(f"/api/records/{record_id}")).json()["data"]
    assert record["diamond"] == 7
    assert record["remark"] == "r"


@pytest.mark.asyncio
async def test_update_and_delete_reject_malformed_ids(client):
    update = await client.put("/api/update", json={"id": "not-an-id", "remark": "x"})
    delete = await client.request("DELETE", "/api/delete", json={"id": "not-an-id"})
    missing = await client.request("DELETE", "/api/delete", json={})

    assert update.status_code == 400
    assert delete.status_code == 400
    assert missing.status_code == 400
    assert update.json()["success"] is False


@pytest.mark.asyncio
async def test_delete_is_idempotent(client):
    record_id = await _submit(client, submitterName="A")

    first = await client.request("DELETE", "/api/delete", json={"id": record_id})
    second = await client.request("DELETE", "/api/delete", json={"id": record_id})

    assert first.json()["deletedCount"] == 1
    assert second.status_code == 200
    assert second.json()["deletedCount"] == 0


@pytest.mark.asyncio
async def test_get_missing_record_returns_404(client):
    response = await client.get("/api/records/00000000-0000-4000-8000-000000000000")

    assert response.status_code == 404
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_unknown_route_returns_envelope(client):
    response = await client.get("/api/nope")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["path"] == "/api/nope"
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_submit_out_of_range_counter_is_stored_as_zero(client):
    record_id = await _submit(
        client,
        name="A",
        date="2024-01-01",
        diamond="99999999999999999999",
        amitabha=2**63 - 1,
    )

    record = (await client.get(f"/api/records/{record_id}")).json()["data"]
    assert record["diamond"] == 0
    assert record["amitabha"] == 2**63 - 1


class _BrokenQueryService:
    async def statistics(self, **kwargs):
        raise RuntimeError("aggregation exploded")


@pytest.mark.asyncio
async def test_unexpected_error_returns_json_envelope(settings):
    app = create_app(settings)
    app.dependency_overrides[get_record_query_service] = lambda: _BrokenQueryService()
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        response = await http.get("/api/stats")

    assert response.status_code == 500
    assert response.headers["content-type"].startswith("application/json")
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Internal server error"
    assert "aggregation exploded" not in body["error"]
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_search_keeps_surrounding_whitespace(client):
    await _submit(client, submitterName="A", remark="nospace")
    await _submit(client, submitterName="B", remark="has space")

    response = await client.get("/api/records", params={"search": " "})

    body = response.json()
    assert body["pagination"]["totalCount"] == 1
    assert [r["remark"] for r in body["data"]] == ["has space"]
