import pytest

from identity_store.db.database import build_engine, build_session_factory, drop_schema, init_schema
from identity_store.db.repositories.users import UserStore
from identity_store.db.schemas import User


@pytest.fixture()
def engine():
    # Fresh in-memory database per test; StaticPool keeps it alive across sessions
    engine = build_engine("sqlite+pysqlite:///:memory:")
    init_schema(engine)
    try:
        yield engine
    finally:
        drop_schema(engine)
        engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture()
def store(session_factory):
    return UserStore(session_factory)


@pytest.fixture()
def alice(store):
    user = User(user_id="alice", name="Alice", email="alice@example.com", password="opaque-hash")
    store.create(user)
    return user


@pytest.fixture()
def bob(store):
    user = User(user_id="bob", name="Bob", email="bob@example.com", password="opaque-hash")
    store.create(user)
    return user
