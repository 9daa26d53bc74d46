# lotkeeper/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with a local SQLite file by default. All models are
imported in create_tables() so one call creates every table.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from lotkeeper.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.SQL_ECHO,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def create_tables(bind=None):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from lotkeeper.models.stored_record import StoredRecord  # noqa

    Base.metadata.create_all(bind=bind or engine)
