"""
tests/conftest.py -- Shared fixtures for the account service tests.

This module provides:
  - engine / db / directory: a fresh in-memory SQLite schema per test
  - service: a fresh AuthService (empty session registry, unprimed flags)
  - client: TestClient on the real app, wired to the two above

Design: the in-memory engine uses StaticPool so every connection (and every
TestClient worker thread) sees the same database. Plain ':memory:' would
give each connection a blank schema.

Environment must be set before any application import: Settings() is built
at import time, and the production hash cost (600k rounds) would make the
suite crawl.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from datetime import timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "1000")
os.environ.setdefault("USER_REGISTRATION_ENABLED", "true")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models.user  # noqa: F401  -- registers users + user_settings on Base
from auth.directory import UserDirectory
from auth.service import AuthService
from auth.sessions import SessionRegistry
from database import Base, get_db
from main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def directory(db) -> UserDirectory:
    return UserDirectory(db)


@pytest.fixture
def service() -> AuthService:
    return AuthService(SessionRegistry(timedelta(hours=1)))


@pytest.fixture
def client(engine, service) -> Generator[TestClient, None, None]:
    """TestClient on the real app with the test database and a fresh AuthService."""
    TestingSession = sessionmaker(bind=engine, autoflush=False)

    def _get_test_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    previous_service = app.state.auth_service
    app.dependency_overrides[get_db] = _get_test_db
    app.state.auth_service = service

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
    app.state.auth_service = previous_service


def register(client: TestClient, username: str, password: str):
    return client.post("/auth/register", json={"username": username, "password": password})


def login(client: TestClient, username: str, password: str):
    """Log in as *username*, dropping whatever session the client held."""
    client.cookies.clear()
    return client.post("/auth/login", json={"username": username, "password": password})
