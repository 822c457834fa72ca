"""
Database Initializer.

Run this script to create the chat tables before starting the API with
CHAT_STORE=sql.

Usage:
    python -m smarthome_support.scripts.db_init
"""

from sqlmodel import Session, func, select

from smarthome_support.config import settings
from smarthome_support.infrastructure.database.connection import engine, init_db
from smarthome_support.infrastructure.database.tables import ChatDBModel


def init_chat_tables():
    print(f"Initializing database at {engine.url.render_as_string(hide_password=True)}...")

    init_db(engine)

    with Session(engine) as session:
        count = session.exec(select(func.count()).select_from(ChatDBModel)).one()
        print(f"Table '{ChatDBModel.__tablename__}' ready with {count} chats.")

    if settings.CHAT_STORE != "sql":
        print("Note: CHAT_STORE is not 'sql'; the API will keep chats in memory.")


if __name__ == "__main__":
    init_chat_tables()
