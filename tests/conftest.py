# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")

from bartercoin.core.security import create_access_token
from bartercoin.db.session import Base
from bartercoin.db.session import get_db as app_get_session
from bartercoin.main import app as fastapi_app
from bartercoin.models import Listing, Profile
from bartercoin.services import ListingService, ProfileService

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite manages BEGIN itself and breaks SAVEPOINT; take over.
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn) -> None:
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    """Session whose commits release savepoints inside one outer transaction."""
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        if transaction.is_active:
            transaction.rollback()
        connection.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def auth_headers(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def headers_for() -> Callable[[str], dict[str, str]]:
    """Return a builder for bearer headers of an arbitrary subject."""
    return auth_headers


@pytest.fixture()
def make_profile(db_session: Session) -> Callable[..., Profile]:
    """Register profiles through the service so balances match the ledger."""

    def _make(user_id: str, username: str | None = None) -> Profile:
        return ProfileService(db_session).register(user_id, username or user_id)

    return _make


@pytest.fixture()
def alice(make_profile: Callable[..., Profile]) -> Profile:
    return make_profile("alice")


@pytest.fixture()
def bob(make_profile: Callable[..., Profile]) -> Profile:
    return make_profile("bob")


@pytest.fixture()
def carol(make_profile: Callable[..., Profile]) -> Profile:
    return make_profile("carol")


@pytest.fixture()
def alice_headers(alice: Profile) -> dict[str, str]:
    return auth_headers(alice.id)


@pytest.fixture()
def bob_headers(bob: Profile) -> dict[str, str]:
    return auth_headers(bob.id)


@pytest.fixture()
def carol_headers(carol: Profile) -> dict[str, str]:
    return auth_headers(carol.id)


@pytest.fixture()
def make_listing(db_session: Session) -> Callable[..., Listing]:
    def _make(owner: Profile, title: str = "Vintage bicycle", **overrides: Any) -> Listing:
        data = {
            "title": title,
            "description": "Well loved and ready for a new home",
            "category": "sports",
            "price": 30,
        }
        data.update(overrides)
        return ListingService(db_session).create(owner.id, data)

    return _make


@pytest.fixture()
def bob_listing(bob: Profile, make_listing: Callable[..., Listing]) -> Listing:
    return make_listing(bob, "Bob's guitar", category="music")


@pytest.fixture()
def alice_listing(alice: Profile, make_listing: Callable[..., Listing]) -> Listing:
    return make_listing(alice, "Alice's camera", category="electronics")
