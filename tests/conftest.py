"""Shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from arblab.db.database import init_db
from arblab.drafts.store import DraftStore


@pytest.fixture
def store(tmp_path) -> Iterator[DraftStore]:
    engine = create_engine(f"sqlite:///{tmp_path / 'arblab-test.db'}", future=True)
    init_db(engine)
    factory = sessionmaker(bind=engine, class_=Session, expire_on_commit=False, autoflush=False)
    yield DraftStore(factory)
    engine.dispose()
