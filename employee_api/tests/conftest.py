# tests/conftest.py
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from employee_api.config import Settings
from employee_api.main import create_app


def sqlite_settings(tmp_path, key_strategy: str) -> Settings:
    return Settings(
        database_url_override=f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}",
        key_strategy=key_strategy,
    )


@pytest.fixture(params=["generated", "database"])
def settings(request, tmp_path) -> Settings:
    """Every API test runs once per key strategy."""
    return sqlite_settings(tmp_path, request.param)


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
