from __future__ import annotations

from logging.config import fileConfig
from pathlib import Path

from alembic import context
from sqlalchemy import create_engine, pool

from billquery.infrastructure.persistence.sqla.engine import build_db_url
from billquery.infrastructure.persistence.sqla.models import metadata
from billquery.settings import load_settings

config = context.config  # pylint: disable=no-member

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Same database the API opens: BILLQUERY_DB_PATH, relative to the working directory.
DB_URL = build_db_url(load_settings().resolve_db_path(Path.cwd()).resolve())


if context.is_offline_mode():
    context.configure(
        url=DB_URL,
        target_metadata=metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()
else:
    connectable = create_engine(DB_URL, poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=metadata,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()
