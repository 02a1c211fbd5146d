"""Shared test fixtures.

Tests run against an in-memory SQLite database; the schema is created before
and dropped after every test, so tests never see each other's rows.
"""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from legate.app.core.context import RequestContext
from legate.app.core.database import Base, SessionLocal, engine, get_db
from legate.app.core.security import create_access_token
from legate.app.main import app
from legate.app.models import (
    Estate,
    EstateCollaborator,
    EstateRole,
    Invoice,
    InvoiceStatus,
    User,
    WorkspaceSettings,
)

# Fixed reference instant for report tests
NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)


# ─── DB session with a fresh schema per test ─────────────────────────────────


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test session."""

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ─── Users & auth ────────────────────────────────────────────────────────────


def _user(db: Session, email: str, **kwargs: Any) -> User:
    user = User(email=email, name=email.split("@")[0], **kwargs)
    db.add(user)
    db.flush()
    return user


@pytest.fixture()
def owner(db: Session) -> User:
    return _user(db, "owner@test.com")


@pytest.fixture()
def other_user(db: Session) -> User:
    return _user(db, "other@test.com")


@pytest.fixture()
def owner_ctx(owner: User) -> RequestContext:
    return RequestContext(user_id=owner.id)


@pytest.fixture()
def owner_token(owner: User) -> str:
    return create_access_token(subject=str(owner.id))


@pytest.fixture()
def other_token(other_user: User) -> str:
    return create_access_token(subject=str(other_user.id))


def auth(token: str) -> dict[str, str]:
    """Return Authorization header dict."""
    return {"Authorization": f"Bearer {token}"}


# ─── Estates ─────────────────────────────────────────────────────────────────


@pytest.fixture()
def estate(db: Session, owner: User) -> Estate:
    e = Estate(owner_id=owner.id, display_name="Estate of Jane Doe", case_name="2026-PR-001")
    db.add(e)
    db.flush()
    return e


@pytest.fixture()
def shared_estate(db: Session, owner: User, other_user: User) -> Estate:
    """Estate owned by *other_user* with *owner* as a collaborator."""
    e = Estate(owner_id=other_user.id, display_name=None, case_name="Smith Probate")
    db.add(e)
    db.flush()
    db.add(EstateCollaborator(estate_id=e.id, user_id=owner.id, role=EstateRole.EDITOR))
    db.flush()
    return e


@pytest.fixture()
def workspace(db: Session, owner: User) -> WorkspaceSettings:
    ws = WorkspaceSettings(owner_id=owner.id, firm_name="Doe & Partners", default_currency=" eur ")
    db.add(ws)
    db.flush()
    return ws


# ─── Invoices ────────────────────────────────────────────────────────────────


@pytest.fixture()
def make_invoice(db: Session, owner: User) -> Callable[..., Invoice]:
    """Factory persisting an invoice owned by *owner*."""

    def _make(
        status: InvoiceStatus = InvoiceStatus.SENT,
        total_amount: Decimal | int | None = 10_000,
        **kwargs: Any,
    ) -> Invoice:
        kwargs.setdefault("owner_id", owner.id)
        inv = Invoice(status=status, total_amount=total_amount, **kwargs)
        db.add(inv)
        db.flush()
        return inv

    return _make
