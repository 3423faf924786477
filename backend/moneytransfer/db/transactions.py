from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from moneytransfer.core.context import OperationContext
from moneytransfer.db.errors import translate_storage_errors

logger = structlog.get_logger(__name__)

T = TypeVar("T")

SERIALIZABLE = "SERIALIZABLE"


class TransactionManager(Protocol):
    def begin(
        self, ctx: OperationContext | None = None, *, isolation_level: str | None = SERIALIZABLE
    ) -> AbstractContextManager[Session]: ...

    def run(
        self,
        fn: Callable[[Session], T],
        ctx: OperationContext | None = None,
        *,
        isolation_level: str | None = None,
    ) -> T: ...


class SqlAlchemyTransactionManager:
    """Opens one Session per transaction.

    The block commits on a clean exit and rolls back on any exception.
    `isolation_level=None` keeps the engine default.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    @contextmanager
    def begin(
        self, ctx: OperationContext | None = None, *, isolation_level: str | None = SERIALIZABLE
    ) -> Iterator[Session]:
        if ctx is not None:
            ctx.check()

        session = self._session_factory()
        try:
            if isolation_level is not None:
                with translate_storage_errors("begin transaction"):
                    session.connection(execution_options={"isolation_level": isolation_level})
            yield session
            with translate_storage_errors("commit transaction"):
                session.commit()
        except BaseException:
            try:
                session.rollback()
            except SQLAlchemyError as exc:
                # keep the original error
                logger.warning("rollback failed", error=str(exc))
            raise
        finally:
            session.close()

    def run(
        self,
        fn: Callable[[Session], T],
        ctx: OperationContext | None = None,
        *,
        isolation_level: str | None = None,
    ) -> T:
        with self.begin(ctx, isolation_level=isolation_level) as session:
            return fn(session)
