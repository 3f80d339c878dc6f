from __future__ import annotations

from hours_tracker.db import engine_options


def test_postgres_engine_checks_connections() -> None:
    options = engine_options("postgresql+asyncpg://user:secret@db:5432/hours_tracker", echo=True)
    assert options == {"echo": True, "pool_pre_ping": True}


def test_sqlite_engine_shares_connection_across_threads() -> None:
    options = engine_options("sqlite+aiosqlite:///./hours_tracker.db")
    assert options == {"echo": False, "connect_args": {"check_same_thread": False}}
