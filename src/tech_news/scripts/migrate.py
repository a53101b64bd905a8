"""Apply Alembic migrations up to the latest revision."""
from __future__ import annotations

from pathlib import Path

from alembic import command
from alembic.config import Config

from tech_news.core.settings import settings

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def build_config() -> Config:
    """Return an Alembic config pointing at this project's migrations."""
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", settings.database_url)
    return cfg


def run_upgrade_head() -> None:
    """Upgrade the configured database to the head revision."""
    command.upgrade(build_config(), "head")


if __name__ == "__main__":
    run_upgrade_head()
