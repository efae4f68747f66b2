import os
import subprocess
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect
from sqlalchemy.orm import sessionmaker
from lendtrack.core.db import make_engine
from lendtrack.core.loans import checkout, return_item
from lendtrack.core.models import ItemType, Item

ROOT = Path(__file__).resolve().parent.parent

def alembic_config(url):
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "lendtrack" / "migrations"))
    cfg.set_main_option("sqlalchemy.url", url)
    cfg.attributes["configure_logger"] = False
    return cfg

def test_upgrade_and_downgrade(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    cfg = alembic_config(url)

    command.upgrade(cfg, "head")
    engine = make_engine(url)
    try:
        tables = set(inspect(engine).get_table_names())
        assert {"item_types", "categories", "items", "loans", "item_categories"} <= tables

        Session = sessionmaker(bind=engine, autoflush=False)
        with Session() as s:
            item_type = ItemType(code="BOOK", name="Book")
            s.add(item_type)
            s.flush()
            item = Item(title="Dune", item_type_id=item_type.id)
            s.add(item)
            s.commit()
            checkout(item.id, "Bob", db_session=s)
            loan = return_item(item.id, db_session=s)
            assert loan.returned_at is not None
    finally:
        engine.dispose()

    command.downgrade(cfg, "base")
    engine = make_engine(url)
    try:
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()

def test_upgrade_uses_configured_database_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'configured.db'}"
    monkeypatch.setattr("lendtrack.configs.DB_URI", url)
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "lendtrack" / "migrations"))
    cfg.attributes["configure_logger"] = False

    command.upgrade(cfg, "head")

    engine = make_engine(url)
    try:
        assert "alembic_version" in inspect(engine).get_table_names()
        assert "loans" in inspect(engine).get_table_names()
    finally:
        engine.dispose()

def test_alembic_cli_on_fresh_database(tmp_path):
    db_file = tmp_path / "fresh.db"
    env = {**os.environ, "DATABASE_URL": f"sqlite:///{db_file}"}
    env.pop("TESTING", None)

    result = subprocess.run(
        [sys.executable, "-m", "alembic", "upgrade", "head"],
        cwd=ROOT, env=env, capture_output=True, text=True,
    )

    assert result.returncode == 0, result.stderr
    engine = make_engine(f"sqlite:///{db_file}")
    try:
        assert {"item_types", "items", "loans"} <= set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
