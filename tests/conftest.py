"""
Shared pytest fixtures for crudkit tests.

This module provides:
- In-memory SQLite engine, session and OrmCrudKit
- mongomock-backed database and MongoCrudKit
- Settings cache isolation

Usage:
    Fixtures are auto-discovered by pytest; request them by name.

    def test_insert(orm_kit):
        orm_kit.insert(User(name="a"))
"""

from __future__ import annotations

import os
from collections.abc import Generator

import mongomock
import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from crudkit.config.settings import clear_settings_cache
from crudkit.kits.mongo import MongoCrudKit
from crudkit.kits.orm import OrmCrudKit
from crudkit.orm.base import CrudKitBase
from crudkit.orm.session import create_crudkit_engine, crudkit_session_factory

import tests._support.models  # noqa: F401  (registers tables on CrudKitBase.metadata)


# =============================================================================
# Relational
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """In-memory SQLite engine with all test tables created."""
    eng = create_crudkit_engine("sqlite://")
    CrudKitBase.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session, None, None]:
    factory = crudkit_session_factory(engine)
    with factory() as s:
        yield s


@pytest.fixture
def orm_kit(session: Session) -> OrmCrudKit:
    return OrmCrudKit(session)


# =============================================================================
# Document store
# =============================================================================


@pytest.fixture
def mongo_database():
    """Database on an in-process mongomock client."""
    client = mongomock.MongoClient()
    yield client["crudkit_test"]
    client.close()


@pytest.fixture
def mongo_kit(mongo_database) -> MongoCrudKit:
    return MongoCrudKit(mongo_database)


# =============================================================================
# Settings isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Generator[None, None, None]:
    """Drop cached settings and any CRUDKIT_* variables from the environment."""
    for key in list(os.environ):
        if key.startswith("CRUDKIT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()
