from pathlib import Path

import pytest
from alembic.config import Config
from alembic.script import ScriptDirectory

# Paths relative to this test file: apps/backend/tests/test_migrations.py
BACKEND_DIR = Path(__file__).parent.parent
ALEMBIC_INI_PATH = BACKEND_DIR / "alembic.ini"
SCRIPT_LOCATION = BACKEND_DIR / "migrations"


@pytest.fixture
def alembic_script():
    """Load the Alembic script directory configuration."""
    if not ALEMBIC_INI_PATH.exists():
        pytest.fail(f"alembic.ini not found at {ALEMBIC_INI_PATH}")

    config = Config(str(ALEMBIC_INI_PATH))
    config.set_main_option("script_location", str(SCRIPT_LOCATION))
    return ScriptDirectory.from_config(config)


def test_revision_id_length(alembic_script):
    """
    Ensure all revision IDs are within the 32-character limit of Alembic's default version table.
    """
    for script in alembic_script.walk_revisions("base", "head"):
        assert len(script.revision) <= 32, (
            f"Revision ID '{script.revision}' is too long ({len(script.revision)} chars)."
        )


def test_single_head(alembic_script):
    """History must be linear."""
    heads = alembic_script.get_heads()
    assert len(heads) == 1, f"Migration graph has multiple heads: {heads}."


def test_users_table_comes_before_seed(alembic_script):
    chain = [script.revision for script in alembic_script.walk_revisions("base", "head")]

    # walk_revisions iterates from head to base
    assert chain == ["0002_seed_demo_users", "0001_create_users_table"]
