# cardano_reputation/database/db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from cardano_reputation.config import Config


def create_session_factory(database_url=None, echo=False):
    """
    Build an engine and a session factory for `database_url`
    (defaults to Config.DATABASE_URL).
    """
    engine = create_engine(
        database_url or Config.DATABASE_URL,
        echo=echo,        # Set True to debug SQL queries
        future=True
    )
    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine
    )
    return engine, SessionLocal


def init_db(engine):
    """Creates all tables if they do not exist yet. Safe to call on every start."""
    from cardano_reputation.database.models_db import Base

    Base.metadata.create_all(bind=engine)
