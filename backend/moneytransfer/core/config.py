from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from moneytransfer.core.backoff import RetryConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MONEYTRANSFER_", env_file=".env", extra="ignore")

    # Any SQLAlchemy URL (e.g. postgresql+psycopg://...). When unset, the
    # SQL Server ODBC settings below are used instead.
    database_url: str | None = None

    # Use the common instance name format used by SSMS, e.g. .\SQLEXPRESS
    db_server: str = r".\SQLEXPRESS"
    db_name: str = "MoneyTransfer"
    db_trusted_connection: bool = True
    db_user: str | None = None
    db_password: str | None = None
    db_driver: str = "ODBC Driver 17 for SQL Server"

    log_level: str = Field(default="info", pattern="^(debug|info|warning|error)$")

    retry_base_delay_ms: int = Field(default=100, gt=0)
    retry_max_delay_ms: int = Field(default=5000, gt=0)
    # Total attempts per bulk transfer, the first one included.
    retry_max_retries: int = Field(default=5, ge=1)

    transfer_timeout_seconds: float = Field(default=30.0, gt=0)

    cors_origins: str = "*"

    server_host: str = "0.0.0.0"
    server_port: int = 8080

    @model_validator(mode="after")
    def _check_retry_delays(self) -> Settings:
        if self.retry_max_delay_ms < self.retry_base_delay_ms:
            raise ValueError("retry_max_delay_ms must be >= retry_base_delay_ms")
        return self

    @property
    def retry_config(self) -> RetryConfig:
        return RetryConfig(
            base_delay=self.retry_base_delay_ms / 1000,
            max_delay=self.retry_max_delay_ms / 1000,
            max_retries=self.retry_max_retries,
        )


settings = Settings()
