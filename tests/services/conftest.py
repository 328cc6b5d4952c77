"""Fixtures for service tests that need real concurrent connections."""

import pytest
from sqlalchemy.orm import sessionmaker

from securezone.db.session import Base, build_engine


@pytest.fixture()
def file_sessions(tmp_path):
    """Yield a session factory bound to a throwaway SQLite file."""
    engine = build_engine(f"sqlite:///{tmp_path / 'votes.db'}", connect_args={"timeout": 30})
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    finally:
        engine.dispose()
