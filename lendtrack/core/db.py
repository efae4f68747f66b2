import logging
import sqlite3
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import scoped_session, sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from lendtrack.configs import DB_URI, DEBUG

logger = logging.getLogger(__name__)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off; cascades depend on it
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def make_engine(uri=DB_URI, **kwargs):
    """Builds an engine for `uri`. In-memory SQLite shares one
    connection across threads so every session sees the same tables.
    """
    engine_kwargs = {'echo': DEBUG}
    if uri.startswith('sqlite'):
        engine_kwargs['connect_args'] = {'check_same_thread': False}
        if ':memory:' in uri or uri in ('sqlite://', 'sqlite:///'):
            engine_kwargs['poolclass'] = StaticPool
    else:
        engine_kwargs['client_encoding'] = 'utf8'
        engine_kwargs['pool_pre_ping'] = True
    engine_kwargs.update(kwargs)
    return create_engine(uri, **engine_kwargs)


engine = make_engine(DB_URI)
SessionLocal = sessionmaker(bind=engine, autoflush=False)
session = scoped_session(SessionLocal)

Base = declarative_base()


def init(bind=None):
    try:
        from lendtrack.core import models  # noqa: F401 registers tables
        Base.metadata.create_all(bind=bind or engine)
        return session
    except Exception as e:
        logger.warning(f"[WARNING] Database initialization failed: {e}")


def get_db():
    """FastAPI dependency yielding one session per request."""
    db_session = SessionLocal()
    try:
        yield db_session
    finally:
        db_session.close()
