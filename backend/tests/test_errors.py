"""
Tests for the error taxonomy and storage error classification.
"""

import pytest
from sqlalchemy import exc as sa_exc

from moneytransfer.core.errors import (
    AccountNotFoundError,
    AmountOverflowError,
    InsufficientFundsError,
    RetryExhaustedError,
    StorageError,
    StorageErrorKind,
    ValidationError,
)
from moneytransfer.db.errors import classify_db_error, translate_storage_errors


class PgError(Exception):
    def __init__(self, pgcode):
        super().__init__("driver said something")
        self.pgcode = pgcode


class OdbcError(Exception):
    pass


class SqliteError(Exception):
    def __init__(self, code):
        super().__init__("database is locked")
        self.sqlite_errorcode = code


def _dbapi(orig, cls=sa_exc.OperationalError, **kwargs):
    return cls("UPDATE bank_accounts SET balance_cents = ?", {}, orig, **kwargs)


class TestClassifyDbError:
    @pytest.mark.parametrize(
        "orig, kind",
        [
            (PgError("40001"), StorageErrorKind.SERIALIZATION_CONFLICT),
            (PgError("40P01"), StorageErrorKind.SERIALIZATION_CONFLICT),
            (PgError("25P02"), StorageErrorKind.TRANSACTION_CLOSED),
            (PgError("08006"), StorageErrorKind.TRANSIENT),
            (PgError("23505"), StorageErrorKind.FATAL),
            (OdbcError("40001", "[Microsoft][ODBC Driver 17] deadlock victim"), StorageErrorKind.SERIALIZATION_CONFLICT),
            (OdbcError("HYT00", "timeout expired"), StorageErrorKind.TRANSIENT),
            (SqliteError(5), StorageErrorKind.SERIALIZATION_CONFLICT),
            (SqliteError(517), StorageErrorKind.SERIALIZATION_CONFLICT),
            (SqliteError(19), StorageErrorKind.FATAL),
        ],
    )
    def test_driver_codes(self, orig, kind):
        assert classify_db_error(_dbapi(orig)) is kind

    def test_message_text_is_not_inspected(self):
        orig = Exception("could not serialize access due to concurrent update: serialization failure")
        assert classify_db_error(_dbapi(orig)) is StorageErrorKind.FATAL

    def test_invalidated_connection_is_transient(self):
        assert classify_db_error(_dbapi(Exception("gone"), connection_invalidated=True)) is StorageErrorKind.TRANSIENT

    def test_pending_rollback_is_closed_transaction(self):
        assert classify_db_error(sa_exc.PendingRollbackError("rolled back")) is StorageErrorKind.TRANSACTION_CLOSED

    def test_unknown_errors_are_fatal(self):
        assert classify_db_error(sa_exc.ArgumentError("bad")) is StorageErrorKind.FATAL


class TestTranslateStorageErrors:
    def test_wraps_with_context(self):
        raw = _dbapi(PgError("40001"))
        with pytest.raises(StorageError) as exc_info:
            with translate_storage_errors("update bank account", account_ref="FR10474608"):
                raise raw
        err = exc_info.value
        assert err.storage_kind is StorageErrorKind.SERIALIZATION_CONFLICT
        assert err.retryable
        assert err.operation == "update bank account"
        assert err.account_ref == "FR10474608"
        assert err.__cause__ is raw
        assert "driver said something" not in err.message

    def test_other_exceptions_pass_through(self):
        with pytest.raises(KeyError):
            with translate_storage_errors("noop"):
                raise KeyError("x")


class TestTaxonomy:
    def test_kinds(self):
        assert ValidationError("bad").kind == "validation"
        assert InsufficientFundsError(required=10, available=5).kind == "insufficient_funds"
        assert AccountNotFoundError("FR10").kind == "not_found"
        assert RetryExhaustedError(3).kind == "retry_exhausted"
        assert StorageError(StorageErrorKind.FATAL, "commit transaction").kind == "storage"

    def test_fatal_storage_errors_are_not_retryable(self):
        assert not StorageError(StorageErrorKind.FATAL, "commit transaction").retryable
        assert StorageError(StorageErrorKind.TRANSIENT, "commit transaction").retryable

    def test_overflow_is_validation(self):
        assert isinstance(AmountOverflowError(), ValidationError)

    def test_insufficient_funds_details(self):
        err = InsufficientFundsError(required=6000, available=5000)
        assert err.required == 6000
        assert err.available == 5000
        assert str(err) == "insufficient funds"
