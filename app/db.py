from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine
import sqlite3
import uuid
import logging
from utils import now_utc

# Retrieve main logger
logger = logging.getLogger("main")

db = SQLAlchemy()


def new_id():
    return str(uuid.uuid4())


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enforce ON DELETE CASCADE on SQLite, as the hosted Postgres does"""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def init_db(app):
    """Create missing tables"""
    # Import models so every table is registered on the metadata
    import models  # noqa: F401

    with app.app_context():
        db.create_all()
        logger.info("Database tables verified.")
