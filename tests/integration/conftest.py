import os

import pytest

from identity_store.db.database import build_engine, build_session_factory, drop_schema, init_schema
from identity_store.db.repositories.users import UserStore


@pytest.fixture(scope="session")
def _postgres_url():
    # Prefer an explicitly provided server; otherwise start a throwaway container
    explicit = os.getenv("TEST_DATABASE_URL")
    if explicit:
        yield explicit
        return

    postgres = pytest.importorskip("testcontainers.postgres")
    image = os.getenv("TEST_POSTGRES_IMAGE", "postgres:16-alpine")
    container = postgres.PostgresContainer(image, driver="psycopg2")
    try:
        container.start()
    except Exception as exc:  # docker not available
        pytest.skip(f"PostgreSQL container unavailable: {exc}")
    try:
        yield container.get_connection_url()
    finally:
        container.stop()


@pytest.fixture()
def pg_engine(_postgres_url):
    engine = build_engine(_postgres_url)
    drop_schema(engine)
    init_schema(engine)
    try:
        yield engine
    finally:
        drop_schema(engine)
        engine.dispose()


@pytest.fixture()
def pg_store(pg_engine):
    return UserStore(build_session_factory(pg_engine))
