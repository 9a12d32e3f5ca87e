"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - sqlalchemy_url is the only place a connection URL is assembled

Design Decisions:
    - database_url overrides the SQL Server pieces when set (tests point it at aiosqlite)
    - Pool: max 10 connections; a connection older than 30s is replaced on checkout
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str | None = None
    database_server: str = "localhost"
    database_port: int = 1433
    database_name: str = "taskboard"
    database_user: str = "sa"
    database_password: str = ""
    database_driver: str = "ODBC Driver 18 for SQL Server"
    database_encrypt: bool = True
    database_trust_server_certificate: bool = False

    database_pool_max: int = 10
    database_pool_idle_timeout_seconds: int = 30

    # Auth
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"

    # API
    api_prefix: str = "/api/v1/internal"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"
    # Parameter values may hold user content; names are always logged
    log_procedure_parameters: bool = False

    @property
    def sqlalchemy_url(self) -> str | URL:
        if self.database_url:
            return self.database_url
        return URL.create(
            "mssql+aioodbc",
            username=self.database_user,
            password=self.database_password,
            host=self.database_server,
            port=self.database_port,
            database=self.database_name,
            query={
                "driver": self.database_driver,
                "Encrypt": "yes" if self.database_encrypt else "no",
                "TrustServerCertificate": (
                    "yes" if self.database_trust_server_certificate else "no"
                ),
            },
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
