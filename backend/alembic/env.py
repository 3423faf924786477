from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from moneytransfer.db.session import build_connection_url
from moneytransfer.models.bank_account import BankAccount  # noqa: F401
from moneytransfer.models.base import Base
from moneytransfer.models.transfer import Transfer  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# The URL may hold ODBC escapes; bypass ConfigParser interpolation.
config.attributes["sqlalchemy.url"] = build_connection_url()

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=config.attributes["sqlalchemy.url"],
        target_metadata=target_metadata,
        literal_binds=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        {"sqlalchemy.url": config.attributes["sqlalchemy.url"]},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
