"""
Shared fixtures: a SQLite database in a temporary file and an HTTP client
talking to the FastAPI app in-process.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from src.config import Settings
from src.infrastructure.database import Database
from src.main import create_app


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        db_connect_retries=1,
        db_retry_delay=0,
    )


@pytest.fixture
async def database(settings):
    database = Database(settings.sqlalchemy_url)
    await database.connect()
    yield database
    await database.close()


@pytest.fixture
def app(settings, database):
    # The lifespan is not run by ASGITransport; inject the ready database directly
    app = create_app(settings)
    app.state.database = database
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def create_user(client):
    async def _create_user(first_name="Ada", last_name="Lovelace", email="ada@example.com"):
        response = await client.post(
            "/users",
            json={"firstName": first_name, "lastName": last_name, "email": email},
        )
        assert response.status_code == 201
        return response.json()

    return _create_user


@pytest.fixture
def create_post(client):
    async def _create_post(user_id, title="Title", description="Description"):
        response = await client.post(
            "/posts",
            json={"title": title, "description": description, "userId": user_id},
        )
        assert response.status_code == 201
        return response.json()

    return _create_post
