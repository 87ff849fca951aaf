"""
Tenistas API — Raquetas Endpoint Tests
========================================

What:  End-to-end tests for /api/raquetas and /health through the ASGI app.
How:   HTTPX AsyncClient with ASGITransport; each test gets a new app with an
       empty racket table. CRUD tests run once per repository backend
       (memory, and database on in-memory SQLite).

What we test:
    ✅ Create → read → update → delete lifecycle with status codes
    ✅ Brand query filter
    ✅ 400 with field errors for invalid bodies
    ✅ 404 for unknown ids and external ids
    ✅ Stored records read back identical on both backends
    ✅ Commit happens before the response; a failed commit is a 500
"""

import uuid
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from tenistas.config import settings
from tenistas.data.raquetas_demo import get_raquetas_demo_data, seed_demo_data
from tenistas.database import session_scope
from tenistas.main import create_app, lifespan
from tenistas.repositories.sql import SqlRaquetasRepository

BASE = "/api/raquetas"


def _ts(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def _create(client, **overrides):
    body = {"brand": "Wilson", "model": "Pro Staff", "price": 199.99}
    body.update(overrides)
    response = await client.post(f"{BASE}/", json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestRaquetaLifecycle:

    @pytest.mark.asyncio
    async def test_create_read_update_delete(self, backend_client):
        # ── POST ──────────────────────────────────────────────────────────
        created = await _create(backend_client)
        assert isinstance(created["id"], int)
        uuid.UUID(created["externalId"])
        assert created["createdAt"] == created["updatedAt"]
        assert created["imageRef"] is None

        raqueta_id = created["id"]

        # ── GET /{id} ─────────────────────────────────────────────────────
        response = await backend_client.get(f"{BASE}/{raqueta_id}")
        assert response.status_code == 200
        assert response.json() == created

        # ── PUT /{id} ─────────────────────────────────────────────────────
        response = await backend_client.put(
            f"{BASE}/{raqueta_id}",
            json={"brand": "ignored", "model": "Pro Staff v2", "price": 149.99},
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == raqueta_id
        assert updated["externalId"] == created["externalId"]
        assert updated["brand"] == "Wilson"
        assert updated["model"] == "Pro Staff v2"
        assert updated["price"] == 149.99
        assert updated["createdAt"] == created["createdAt"]
        assert _ts(updated["updatedAt"]) >= _ts(created["updatedAt"])

        # ── DELETE /{id} ──────────────────────────────────────────────────
        response = await backend_client.delete(f"{BASE}/{raqueta_id}")
        assert response.status_code == 204
        assert response.content == b""

        response = await backend_client.get(f"{BASE}/{raqueta_id}")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_find_by_external_id(self, backend_client):
        created = await _create(backend_client, imageRef="/img/pro-staff.png")

        response = await backend_client.get(f"{BASE}/find/{created['externalId']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]
        assert response.json()["imageRef"] == "/img/pro-staff.png"

    @pytest.mark.asyncio
    async def test_create_ignores_client_identity_fields(self, backend_client):
        created = await _create(backend_client, id=999, externalId=str(uuid.uuid4()))
        assert created["id"] == 1


class TestRaquetaListing:

    @pytest.mark.asyncio
    async def test_list_all(self, backend_client):
        await _create(backend_client, brand="Wilson")
        await _create(backend_client, brand="Babolat", model="Pure Aero")

        response = await backend_client.get(f"{BASE}/")

        assert response.status_code == 200
        assert [r["brand"] for r in response.json()] == ["Wilson", "Babolat"]

    @pytest.mark.asyncio
    async def test_list_filtered_by_brand(self, backend_client):
        await _create(backend_client, brand="Wilson")
        await _create(backend_client, brand="Babolat", model="Pure Aero")

        response = await backend_client.get(f"{BASE}/", params={"brand": "wil"})

        assert response.status_code == 200
        assert [r["brand"] for r in response.json()] == ["Wilson"]

    @pytest.mark.asyncio
    async def test_empty_brand_returns_everything(self, backend_client):
        await _create(backend_client, brand="Wilson")
        await _create(backend_client, brand="Head", model="Speed")

        response = await backend_client.get(f"{BASE}/", params={"brand": ""})

        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, backend_client):
        response = await backend_client.get(f"{BASE}/")
        assert response.status_code == 200
        assert response.json() == []


class TestRaquetaErrors:

    @pytest.mark.asyncio
    async def test_create_with_invalid_body_returns_field_errors(self, backend_client):
        response = await backend_client.post(
            f"{BASE}/", json={"brand": " ", "price": -5}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        fields = {error["field"] for error in body["details"]["errors"]}
        assert fields == {"brand", "model", "price"}
        assert response.headers["X-Request-ID"] == body["request_id"]

    @pytest.mark.asyncio
    async def test_create_with_wrong_type_returns_400(self, backend_client):
        response = await backend_client.post(
            f"{BASE}/", json={"brand": "Head", "model": "Speed", "price": "cheap"}
        )

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["details"]["errors"]] == ["price"]

    @pytest.mark.asyncio
    async def test_update_unknown_id_returns_404(self, backend_client):
        response = await backend_client.put(
            f"{BASE}/42", json={"brand": "Head", "model": "Speed", "price": 10}
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_update_with_invalid_body_returns_400(self, backend_client):
        created = await _create(backend_client)

        response = await backend_client.put(
            f"{BASE}/{created['id']}", json={"brand": "Wilson", "model": "", "price": 1}
        )

        assert response.status_code == 400
        assert response.json()["details"]["errors"][0]["field"] == "model"

    @pytest.mark.asyncio
    async def test_delete_unknown_id_returns_404(self, backend_client):
        response = await backend_client.delete(f"{BASE}/42")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_unknown_external_id_returns_404(self, backend_client):
        response = await backend_client.get(f"{BASE}/find/{uuid.uuid4()}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_external_id_returns_400(self, backend_client):
        response = await backend_client.get(f"{BASE}/find/not-a-uuid")
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed(self, backend_client):
        response = await backend_client.get(f"{BASE}/7", headers={"X-Request-ID": "abc12345"})

        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "abc12345"
        assert response.json()["request_id"] == "abc12345"

    @pytest.mark.asyncio
    async def test_malformed_client_request_id_is_replaced(self, backend_client):
        response = await backend_client.get(f"{BASE}/7", headers={"X-Request-ID": "bad id;x"})

        rid = response.headers["X-Request-ID"]
        assert rid != "bad id;x"
        assert len(rid) == 8
        assert response.json()["request_id"] == rid

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity"])
    async def test_non_finite_price_returns_400(self, backend_client, price):
        response = await backend_client.post(
            f"{BASE}/",
            content='{"brand": "Wilson", "model": "Pro Staff", "price": ' + price + "}",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert [e["field"] for e in response.json()["details"]["errors"]] == ["price"]
        assert (await backend_client.get(f"{BASE}/")).json() == []

    @pytest.mark.asyncio
    async def test_over_long_fields_return_400(self, backend_client):
        response = await backend_client.post(
            f"{BASE}/",
            json={"brand": "W" * 101, "model": "Pro Staff", "price": 1, "imageRef": "x" * 256},
        )

        assert response.status_code == 400
        fields = [e["field"] for e in response.json()["details"]["errors"]]
        assert fields == ["brand", "imageRef"]


class TestHealthAndSeeding:

    @pytest.mark.asyncio
    async def test_health(self, backend_app, backend_client):
        response = await backend_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["repository_backend"] == backend_app.state.repository_backend
        assert body["storage"] == "connected"

    @pytest.mark.asyncio
    async def test_seeded_demo_data_is_served(self, app, test_client):
        created = await seed_demo_data(app.state.memory_repository)

        response = await test_client.get(f"{BASE}/", params={"brand": "BABOLAT"})

        assert created == len(get_raquetas_demo_data())
        assert {r["model"] for r in response.json()} == {"Pure Aero", "Pure Drive"}

    @pytest.mark.asyncio
    async def test_seeding_skips_non_empty_store(self, memory_repository, raqueta_factory):
        await memory_repository.save(raqueta_factory())

        assert await seed_demo_data(memory_repository) == 0
        assert await memory_repository.count() == 1


class TestDatabaseBackend:
    """Transaction boundaries and startup seeding of the database backend."""

    @pytest.mark.asyncio
    async def test_failed_commit_returns_500_and_stores_nothing(self, database_engine, monkeypatch):
        app = create_app(repository_backend="database")
        real_commit = AsyncSession.commit

        async def failing_commit(session):
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            monkeypatch.setattr(AsyncSession, "commit", failing_commit)
            response = await client.post(
                f"{BASE}/", json={"brand": "Wilson", "model": "Pro Staff", "price": 199.99}
            )
            monkeypatch.setattr(AsyncSession, "commit", real_commit)

            listing = await client.get(f"{BASE}/")

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert response.headers["X-Request-ID"] == response.json()["request_id"]
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_created_racket_reads_back_from_a_new_session(self, database_engine):
        app = create_app(repository_backend="database")
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            created = await _create(client)

        async with session_scope() as session:
            stored = await SqlRaquetasRepository(session).find_by_id(created["id"])

        assert stored is not None
        assert stored.created_at.tzinfo is not None
        assert _ts(created["createdAt"]) == stored.created_at

    @pytest.mark.asyncio
    async def test_startup_seeds_empty_database(self, database_engine, monkeypatch):
        monkeypatch.setattr(settings, "seed_demo_data", True)
        app = create_app(repository_backend="database")

        async with lifespan(app):
            async with session_scope() as session:
                seeded = await SqlRaquetasRepository(session).find_all_by_brand("wilson")
                total = await SqlRaquetasRepository(session).count()

        assert total == len(get_raquetas_demo_data())
        assert {r.model for r in seeded} == {"Pro Staff 97", "Blade 98"}
