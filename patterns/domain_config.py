"""Dataclass-based domain configuration pattern.

Each vertical defines its settings as a frozen dataclass. This gives you:
- Type safety (IDE autocompletion, mypy checking)
- Default values (sensible out-of-the-box)
- Immutability (frozen=True prevents accidental mutation)
- Easy overrides (from env vars or test fixtures)

Example domain: a book catalog with storage, database, and logging config.
"""

import os
from dataclasses import dataclass, field


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Nested config sections
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DatabaseConfig:
    """Relational store connection settings."""

    url: str | None = None  # overrides the individual parts when set
    host: str = "localhost"
    port: int = 5432
    name: str = "catalog"
    user: str = "postgres"
    password: str = "postgres"
    ssl: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    echo: bool = False

    @property
    def dsn(self) -> str:
        """SQLAlchemy async URL for this database."""
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.name}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.dsn.startswith("sqlite")


@dataclass(frozen=True)
class LoggingConfig:
    """Log sink settings."""

    level: str = "INFO"
    json: bool = False


@dataclass(frozen=True)
class AppConfig:
    """HTTP surface settings."""

    store: str = "memory"  # "memory" or "sql"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: tuple[str, ...] = ("http://localhost:3000",)
    version: str = "0.1.0"


# ---------------------------------------------------------------------------
# Top-level domain config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CatalogConfig:
    """Complete configuration for the catalog vertical.

    Usage::

        config = CatalogConfig.from_env()
        if config.app.store == "sql":
            engine = create_engine(config.database)
    """

    app: AppConfig = field(default_factory=AppConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def default(cls) -> "CatalogConfig":
        """Create config with all defaults."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "") -> "CatalogConfig":
        """Create config from environment variables.

        Example: CATALOG_STORE=sql DB_HOST=db.internal DB_PORT=5433
        """
        defaults_app = AppConfig()
        defaults_db = DatabaseConfig()

        origins = os.getenv(f"{prefix}CORS_ORIGINS")
        app = AppConfig(
            store=os.getenv(f"{prefix}CATALOG_STORE", defaults_app.store).strip().lower(),
            host=os.getenv(f"{prefix}HOST", defaults_app.host),
            port=int(os.getenv(f"{prefix}PORT", str(defaults_app.port))),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins
                else defaults_app.cors_origins
            ),
        )
        if app.store not in ("memory", "sql"):
            raise ValueError(f"CATALOG_STORE must be 'memory' or 'sql', got {app.store!r}")

        database = DatabaseConfig(
            url=os.getenv(f"{prefix}DATABASE_URL") or None,
            host=os.getenv(f"{prefix}DB_HOST", defaults_db.host),
            port=int(os.getenv(f"{prefix}DB_PORT", str(defaults_db.port))),
            name=os.getenv(f"{prefix}DB_NAME", defaults_db.name),
            user=os.getenv(f"{prefix}DB_USER", defaults_db.user),
            password=os.getenv(f"{prefix}DB_PASSWORD", defaults_db.password),
            ssl=_env_bool(f"{prefix}DB_SSL", defaults_db.ssl),
            pool_size=int(os.getenv(f"{prefix}DB_POOL_SIZE", str(defaults_db.pool_size))),
            max_overflow=int(
                os.getenv(f"{prefix}DB_MAX_OVERFLOW", str(defaults_db.max_overflow))
            ),
            echo=_env_bool(f"{prefix}DB_ECHO", defaults_db.echo),
        )

        logging = LoggingConfig(
            level=os.getenv(f"{prefix}LOG_LEVEL", "INFO").upper(),
            json=_env_bool(f"{prefix}LOG_JSON", False),
        )

        return cls(app=app, database=database, logging=logging)
