# alembic/env.py
# Works for both `alembic upgrade head` (via alembic.ini) and `flask db upgrade`.
import logging
import pathlib
import sys
from logging.config import fileConfig

from alembic import context

BASE_DIR = pathlib.Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

config = context.config
if getattr(config, "config_file_name", None):
    fileConfig(config.config_file_name)
logger = logging.getLogger("alembic.env")

from wsgi import app  # noqa: E402
from boardeval.extensions import db  # noqa: E402

target_metadata = db.metadata


def _skip_empty_autogenerate(context_, revision, directives):
    # `flask db migrate` with no model changes should not write a blank revision
    if getattr(config.cmd_opts, "autogenerate", False):
        script = directives[0]
        if script.upgrade_ops.is_empty():
            directives[:] = []
            logger.info("No changes in schema detected.")


def _configure(**kw):
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=True,  # sqlite ALTER support
        process_revision_directives=_skip_empty_autogenerate,
        **kw,
    )


def run_migrations_offline():
    with app.app_context():
        url = app.config["SQLALCHEMY_DATABASE_URI"]
    _configure(url=url, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    with app.app_context():
        with db.engine.connect() as connection:
            _configure(connection=connection)
            with context.begin_transaction():
                context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
