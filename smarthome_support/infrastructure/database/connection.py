"""
Database Connection Manager.

This module handles the low-level details of connecting to the chat database.
It exposes the SQLModel engine which will be used by the Repositories.
"""

from sqlmodel import create_engine, SQLModel
from ...config import settings

# SQLite connections are used from FastAPI's threadpool
_connect_args = (
    {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
)

# echo=False in production to avoid leaking chat contents in logs
engine = create_engine(settings.DATABASE_URL, echo=False, connect_args=_connect_args)


def init_db(db_engine=None):
    """
    Idempotent initialization.
    Creates tables if they do not exist.
    """
    # Import for the side effect of registering the tables on the metadata
    from . import tables  # noqa: F401

    SQLModel.metadata.create_all(db_engine or engine)
