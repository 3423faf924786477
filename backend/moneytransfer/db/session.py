from __future__ import annotations

from functools import lru_cache
from urllib.parse import quote_plus

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from moneytransfer.core.config import settings


def build_connection_url() -> str:
    if settings.database_url:
        return settings.database_url

    # Use ODBC connection string to avoid URL-escaping pain on Windows instance names.
    # Some .env examples may contain double backslashes (e.g. .\\SQLEXPRESS). ODBC expects .\SQLEXPRESS.
    server = settings.db_server.replace("\\\\", "\\")
    parts: list[str] = [
        f"DRIVER={{{settings.db_driver}}}",
        f"SERVER={server}",
        f"DATABASE={settings.db_name}",
        "TrustServerCertificate=yes",
    ]

    if settings.db_trusted_connection:
        parts.append("Trusted_Connection=yes")
    else:
        if not settings.db_user or not settings.db_password:
            raise ValueError("SQL login requires MONEYTRANSFER_DB_USER and MONEYTRANSFER_DB_PASSWORD")
        parts.append(f"UID={settings.db_user}")
        parts.append(f"PWD={settings.db_password}")

    odbc_str = ";".join(parts)
    return "mssql+pyodbc:///?odbc_connect=" + quote_plus(odbc_str)


def enable_sqlite_transactions(engine: Engine) -> None:
    """Make pysqlite open the transaction with the first statement.

    By default pysqlite only emits BEGIN before DML, so a SELECT run ahead of
    an UPDATE sits outside the transaction and concurrent writers can lose
    updates. With this, the balance read holds a SHARED lock and a competing
    writer gets SQLITE_BUSY instead.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def make_engine(url: str, **kwargs) -> Engine:
    engine = create_engine(url, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        enable_sqlite_transactions(engine)
    return engine


@lru_cache
def get_engine() -> Engine:
    return make_engine(build_connection_url(), pool_pre_ping=True)


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    # expire_on_commit=False keeps committed rows readable after the session closes.
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return make_session_factory(get_engine())
