"""Tests for the customer endpoints against a SQLite database."""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from crm.infrastructure.database.base import Base
from crm.infrastructure.database.session import CrmSession, get_db_session
from crm.main import app


@pytest_asyncio.fixture
async def client(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'crm.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(
        engine, class_=AsyncSession, sync_session_class=CrmSession, expire_on_commit=False,
    )

    async def _session_override():
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = _session_override
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http
    app.dependency_overrides.clear()
    await engine.dispose()


@pytest.mark.asyncio
async def test_create_customer_returns_timestamps(client: AsyncClient):
    response = await client.post(
        "/api/v1/customers", json={"name": "Contoso", "email": "hi@contoso.example"}
    )

    assert response.status_code == 201
    data = response.json()
    assert data["id"] > 0
    assert data["created_date"] is not None
    assert data["created_date"] == data["modified_date"]


@pytest.mark.asyncio
async def test_duplicate_email_is_a_conflict(client: AsyncClient):
    payload = {"name": "Contoso", "email": "dup@example.com"}
    assert (await client.post("/api/v1/customers", json=payload)).status_code == 201

    response = await client.post("/api/v1/customers", json={**payload, "name": "Other"})

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_update_keeps_created_date(client: AsyncClient):
    created = (await client.post("/api/v1/customers", json={"name": "Old"})).json()

    response = await client.put(f"/api/v1/customers/{created['id']}", json={"name": "New"})

    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "New"
    assert data["created_date"][:19] == created["created_date"][:19]
    assert data["modified_date"] is not None


@pytest.mark.asyncio
async def test_missing_customer_is_404(client: AsyncClient):
    assert (await client.get("/api/v1/customers/999")).status_code == 404
    assert (await client.put("/api/v1/customers/999", json={"name": "X"})).status_code == 404
    assert (await client.delete("/api/v1/customers/999")).status_code == 404


@pytest.mark.asyncio
async def test_list_and_delete(client: AsyncClient):
    created = (await client.post("/api/v1/customers", json={"name": "Temp"})).json()
    listed = (await client.get("/api/v1/customers")).json()
    assert [c["name"] for c in listed] == ["Temp"]

    assert (await client.delete(f"/api/v1/customers/{created['id']}")).status_code == 204
    assert (await client.get("/api/v1/customers")).json() == []
