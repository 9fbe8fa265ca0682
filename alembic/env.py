"""Alembic environment for the portal schema. The URL always comes from portal settings."""

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.pool import NullPool

os.environ.setdefault("APP_ENV", "dev")
from portal.core.config import settings
from portal.models import Base

# Every model must be imported so autogenerate sees its table.
from portal.models import (  # noqa: F401
    BugReport,
    BuildDownload,
    ConsentLogEntry,
    FeatureToggle,
    GameBuild,
    MessagePost,
    SystemLog,
    TeamAnnouncement,
    User,
    UserSession,
)

config = context.config
# alembic.ini may omit the logging sections; fileConfig raises KeyError then.
if config.config_file_name is not None:
    try:
        fileConfig(config.config_file_name)
    except KeyError:
        pass

target_metadata = Base.metadata


def database_url() -> str:
    return settings.DATABASE_URL


def migration_options(url: str) -> dict:
    """Options shared by offline and online runs. SQLite needs batch mode for ALTER."""
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": make_url(url).get_backend_name() == "sqlite",
    }


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting (alembic upgrade --sql)."""
    url = database_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **migration_options(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = database_url()
    connectable = create_engine(url, poolclass=NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection, **migration_options(url))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
