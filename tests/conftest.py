"""Shared test fixtures."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inkhub.core.account.models import Account
from inkhub.db.database import enable_sqlite_foreign_keys, get_db
from inkhub.db.models import Base
from inkhub.main import app
from inkhub.services.account_service import AccountService


@pytest.fixture()
def session_factory() -> sessionmaker:
    """테스트마다 새 인메모리 SQLite (FK 활성화)"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    engine.dispose()


@pytest.fixture()
def db_session(session_factory: sessionmaker) -> Generator[Session, None, None]:
    """Raw database session for direct DB assertions."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory: sessionmaker) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the per-test in-memory database."""

    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_account(db_session: Session):
    """계정 생성 헬퍼: make_account("art1", "artist")"""
    service = AccountService(db_session)

    def _make(username: str, role: str, **profile_fields) -> Account:
        return service.register(
            username=username,
            email=f"{username}@example.com",
            role=role,
            profile_fields=profile_fields,
        )

    return _make
