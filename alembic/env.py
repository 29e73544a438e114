"""Alembic environment: URL and metadata come from the application."""
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from evalhub.core.config import settings
from evalhub.core.database import Base
import evalhub.models  # noqa: F401  registers every table on Base.metadata

config = context.config
if config.config_file_name:
    fileConfig(config.config_file_name)

db_url = settings.DATABASE_URL
config.set_main_option("sqlalchemy.url", db_url)

target_metadata = Base.metadata


def _redact_url(url: str) -> str:
    """Hide the password when echoing the URL."""
    try:
        prefix, rest = url.split("://", 1)
        if "@" in rest and ":" in rest.split("@", 1)[0]:
            creds, tail = rest.split("@", 1)
            user, _pwd = creds.split(":", 1)
            return f"{prefix}://{user}:***@{tail}"
        return url
    except ValueError:
        return url


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    engine = create_engine(db_url, poolclass=pool.NullPool)
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=settings.is_sqlite,
        )
        with context.begin_transaction():
            context.run_migrations()


print("Migrating", _redact_url(db_url))

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
