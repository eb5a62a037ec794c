"""Unit tests for the Alembic migration environment and revisions."""

from argparse import Namespace
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect

from verifydesk.core.database import entities  # noqa: F401
from verifydesk.core.database.base import Base
from verifydesk.server.core import constant

ALEMBIC_DIR = Path(__file__).resolve().parents[4] / "alembic"


@pytest.fixture
def db_file(tmp_path) -> Path:
    return tmp_path / "migrations.db"


@pytest.fixture
def alembic_config(db_file) -> Config:
    # No ini file, so env.py leaves the logging configuration alone.
    config = Config(cmd_opts=Namespace(x=[f"url=sqlite+aiosqlite:///{db_file}"]))
    config.set_main_option("script_location", str(ALEMBIC_DIR))
    return config


def _columns_by_table(db_file: Path) -> dict:
    engine = create_engine(f"sqlite:///{db_file}")
    try:
        inspector = inspect(engine)
        return {
            table: {column["name"] for column in inspector.get_columns(table)}
            for table in inspector.get_table_names()
            if table != "alembic_version"
        }
    finally:
        engine.dispose()


class TestMigrations:
    def test_single_head_matches_schema_version(self, alembic_config):
        heads = ScriptDirectory.from_config(alembic_config).get_heads()

        assert heads == [constant.SCHEMA_VERSION]

    def test_upgrade_creates_the_entity_tables(self, alembic_config, db_file):
        command.upgrade(alembic_config, "head")

        expected = {name: {column.name for column in table.columns} for name, table in Base.metadata.tables.items()}
        assert _columns_by_table(db_file) == expected

    def test_downgrade_drops_everything(self, alembic_config, db_file):
        command.upgrade(alembic_config, "head")
        command.downgrade(alembic_config, "base")

        assert _columns_by_table(db_file) == {}
