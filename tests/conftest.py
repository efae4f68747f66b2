import os

os.environ.setdefault("TESTING", "true")

import pytest
from sqlalchemy import event
from sqlalchemy.orm import sessionmaker
from lendtrack.core.db import Base, make_engine
from lendtrack.core.models import ItemType, Category, Item


@pytest.fixture
def engine():
    engine = make_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()

@pytest.fixture
def db_session(engine):
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def file_engine(tmp_path):
    """A file backed database so several threads can hold their own connections."""
    engine = make_engine(
        f"sqlite:///{tmp_path / 'lendtrack.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()

@pytest.fixture
def run_before_first(file_engine):
    """Installs a hook running `competitor` once, right before the first
    statement starting with `prefix` reaches the database."""
    hooks = []

    def install(prefix, competitor):
        fired = []

        def hook(conn, cursor, statement, parameters, context, executemany):
            if not fired and statement.lstrip().upper().startswith(prefix):
                fired.append(statement)
                competitor()

        event.listen(file_engine, "before_cursor_execute", hook)
        hooks.append(hook)

    yield install
    for hook in hooks:
        event.remove(file_engine, "before_cursor_execute", hook)

@pytest.fixture
def catalog(db_session):
    """A book type, a Fiction > Science Fiction tree and one available book."""
    book = ItemType(code="BOOK", name="Book")
    fiction = Category(code="FICT", name="Fiction")
    db_session.add_all([book, fiction])
    db_session.flush()
    scifi = Category(code="SCIFI", name="Science Fiction", parent_id=fiction.id)
    db_session.add(scifi)
    db_session.flush()
    item = Item(title="Dune", item_type_id=book.id)
    db_session.add(item)
    db_session.commit()
    return {
        "item_type_id": book.id,
        "fiction_id": fiction.id,
        "scifi_id": scifi.id,
        "item_id": item.id,
    }
