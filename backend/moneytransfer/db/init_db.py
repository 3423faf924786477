from __future__ import annotations

from sqlalchemy import Engine, inspect

REQUIRED_TABLES = ("bank_accounts", "transfers")


def ensure_schema(engine: Engine) -> None:
    # Fail fast if database schema is behind code.
    inspector = inspect(engine)
    missing = [name for name in REQUIRED_TABLES if not inspector.has_table(name)]
    if missing:
        raise RuntimeError(
            f"Database schema is missing tables: {', '.join(missing)}. "
            "Run: alembic upgrade head"
        )
