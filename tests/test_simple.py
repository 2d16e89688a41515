"""
Simple test cases to verify test configuration.
"""
import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

@pytest.mark.asyncio
async def test_app_exists(client: AsyncClient):
    """Test that app exists."""
    assert client is not None

@pytest.mark.asyncio
async def test_database_session(async_session: AsyncSession):
    """Test that database session works."""
    assert async_session is not None
    from sqlalchemy import text
    result = await async_session.execute(text("SELECT 1"))
    assert result.scalar() == 1

@pytest.mark.asyncio
async def test_trace_id_header_is_echoed(client: AsyncClient):
    """Test that the logging middleware propagates X-Trace-ID."""
    response = await client.get("/api/v1/catalog/categories", headers={"X-Trace-ID": "trace-123"})
    assert response.status_code == 200
    assert response.headers["X-Trace-ID"] == "trace-123"
