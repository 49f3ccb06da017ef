import logging

import pytest
from sqlalchemy import text

from src.blog.infrastructure import (
    SQLAlchemyPostRepository,
    SQLAlchemyUserRepository,
)
from src.core import DatabaseUnavailableException
from src.infrastructure.database import Database, connect_with_retry


class FlakyDatabase:
    """Fails a given number of connect() calls, then succeeds."""

    def __init__(self, failures: int):
        self.failures = failures
        self.attempts = 0

    async def connect(self) -> None:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise ConnectionRefusedError("Connection refused")


@pytest.fixture
def delays():
    return []


@pytest.fixture
def fake_sleep(delays):
    async def _sleep(seconds):
        delays.append(seconds)

    return _sleep


async def test_gives_up_after_ten_attempts(delays, fake_sleep):
    database = FlakyDatabase(failures=100)

    with pytest.raises(DatabaseUnavailableException) as exc_info:
        await connect_with_retry(database, sleep=fake_sleep)

    assert database.attempts == 10
    assert delays == [5.0] * 10
    assert sum(delays) == 50.0
    assert exc_info.value.details == {"attempts": 10}


async def test_stops_retrying_once_connected(delays, fake_sleep):
    database = FlakyDatabase(failures=2)

    attempt = await connect_with_retry(database, max_attempts=10, delay_seconds=5.0, sleep=fake_sleep)

    assert attempt == 3
    assert database.attempts == 3
    assert delays == [5.0, 5.0]


async def test_first_attempt_success_does_not_wait(delays, fake_sleep):
    database = FlakyDatabase(failures=0)

    assert await connect_with_retry(database, sleep=fake_sleep) == 1
    assert delays == []


async def test_each_failure_logs_remaining_attempts(caplog, fake_sleep):
    caplog.set_level(logging.INFO, logger="src.infrastructure.database")
    database = FlakyDatabase(failures=3)

    with pytest.raises(DatabaseUnavailableException):
        await connect_with_retry(database, max_attempts=3, delay_seconds=0, sleep=fake_sleep)

    remaining = [record.retries_left for record in caplog.records if hasattr(record, "retries_left")]
    assert remaining == [2, 1, 0]


async def test_unreachable_database_is_retried(tmp_path, delays, fake_sleep):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'db.sqlite'}")

    with pytest.raises(DatabaseUnavailableException):
        await connect_with_retry(database, max_attempts=2, delay_seconds=0.5, sleep=fake_sleep)

    assert delays == [0.5, 0.5]
    assert not database.is_ready
    await database.close()


async def test_session_requires_ready_database(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'db.sqlite'}")

    with pytest.raises(DatabaseUnavailableException):
        async with database.session():
            pass


async def test_lifecycle(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'db.sqlite'}")
    assert not database.is_ready

    await database.connect()
    assert database.is_ready

    await database.close()
    assert not database.is_ready
    with pytest.raises(DatabaseUnavailableException):
        database.engine


async def test_cascade_is_enforced_by_storage(database):
    async with database.session() as session:
        users = SQLAlchemyUserRepository(session)
        posts = SQLAlchemyPostRepository(session)
        user = await users.save(users.create(first_name="A", last_name="B", email="a@b.com"))
        await posts.save(posts.create(title="T", description="D", user_id=user.id))
        await posts.save(posts.create(title="T2", description="D2", user_id=user.id))
        user_id = user.id

    # Delete the parent row directly, bypassing the ORM
    async with database.engine.begin() as conn:
        await conn.execute(text('DELETE FROM "user" WHERE id = :id'), {"id": user_id})

    async with database.session() as session:
        assert await SQLAlchemyPostRepository(session).find_by_user(user_id) == []


async def test_post_requires_existing_user_at_storage_level(database):
    async with database.session() as session:
        posts = SQLAlchemyPostRepository(session)
        with pytest.raises(Exception):
            await posts.save(posts.create(title="T", description="D", user_id=999))


async def test_repository_find_all_and_remove(database):
    async with database.session() as session:
        users = SQLAlchemyUserRepository(session)
        first = await users.save(users.create(first_name="A", last_name="A", email="a@a"))
        second = await users.save(users.create(first_name="B", last_name="B", email="b@b"))

        assert [u.id for u in await users.find_all()] == [first.id, second.id]

        await users.remove(first)

        assert await users.find_by_id(first.id) is None
        assert [u.id for u in await users.find_all()] == [second.id]


async def test_failure_log_masks_url_password(caplog, fake_sleep):
    caplog.set_level(logging.INFO, logger="src.infrastructure.database")

    class LeakyDatabase:
        async def connect(self):
            raise OSError("cannot reach postgresql+asyncpg://root:s3cret@db:5432/test_db")

    with pytest.raises(DatabaseUnavailableException):
        await connect_with_retry(LeakyDatabase(), max_attempts=1, delay_seconds=0, sleep=fake_sleep)

    errors = [record.error for record in caplog.records if hasattr(record, "error")]
    assert errors == ["cannot reach postgresql+asyncpg://root:***@db:5432/test_db"]
