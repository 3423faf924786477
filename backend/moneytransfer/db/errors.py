from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import exc as sa_exc

from moneytransfer.core.errors import StorageError, StorageErrorKind

logger = structlog.get_logger(__name__)

# sqlite3 primary result codes
_SQLITE_BUSY = 5
_SQLITE_LOCKED = 6

_CONFLICT_SQLSTATES = {
    "40001",  # serialization_failure (PostgreSQL, SQL Server deadlock victim)
    "40P01",  # deadlock_detected (PostgreSQL)
}
_CLOSED_SQLSTATES = {
    "25P02",  # in_failed_sql_transaction
    "25000",  # invalid transaction state
    "25006",  # read_only_sql_transaction
}
_TRANSIENT_SQLSTATES = {
    "57P01",  # admin_shutdown
    "57P03",  # cannot_connect_now
    "HYT00",  # ODBC timeout expired
    "HYT01",  # ODBC connection timeout expired
}


def _sqlstate(orig: BaseException | None) -> str | None:
    if orig is None:
        return None
    for attr in ("sqlstate", "pgcode"):
        value = getattr(orig, attr, None)
        if isinstance(value, str):
            return value
    # pyodbc puts the SQLSTATE in args[0]
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], str) and len(args[0]) == 5 and args[0].isalnum():
        return args[0].upper()
    return None


def classify_db_error(error: BaseException) -> StorageErrorKind:
    if isinstance(error, (sa_exc.PendingRollbackError, sa_exc.ResourceClosedError)):
        return StorageErrorKind.TRANSACTION_CLOSED
    if isinstance(error, (sa_exc.DisconnectionError, sa_exc.TimeoutError)):
        return StorageErrorKind.TRANSIENT
    if not isinstance(error, sa_exc.DBAPIError):
        return StorageErrorKind.FATAL

    if error.connection_invalidated:
        return StorageErrorKind.TRANSIENT

    orig = error.orig
    sqlite_code = getattr(orig, "sqlite_errorcode", None)
    if isinstance(sqlite_code, int) and (sqlite_code & 0xFF) in (_SQLITE_BUSY, _SQLITE_LOCKED):
        return StorageErrorKind.SERIALIZATION_CONFLICT

    state = _sqlstate(orig)
    if state is None:
        return StorageErrorKind.FATAL
    if state in _CONFLICT_SQLSTATES:
        return StorageErrorKind.SERIALIZATION_CONFLICT
    if state in _CLOSED_SQLSTATES:
        return StorageErrorKind.TRANSACTION_CLOSED
    if state in _TRANSIENT_SQLSTATES or state.startswith("08"):
        return StorageErrorKind.TRANSIENT
    return StorageErrorKind.FATAL


@contextmanager
def translate_storage_errors(operation: str, *, account_ref: str | None = None) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as StorageError tagged with a kind."""

    try:
        yield
    except sa_exc.SQLAlchemyError as exc:
        kind = classify_db_error(exc)
        logger.warning(
            "storage operation failed",
            operation=operation,
            account_ref=account_ref,
            storage_kind=kind.value,
            error=str(exc),
        )
        raise StorageError(kind, operation, account_ref=account_ref) from exc
