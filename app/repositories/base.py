"""
Shared CRUD operations for flat catalog tables
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db


class BaseRepository:
    """Subclasses set `model`; every write commits or rolls back"""

    model = None

    @classmethod
    def _ordered(cls):
        query = cls.model.query
        if hasattr(cls.model, "created_at"):
            query = query.order_by(cls.model.created_at.desc())
        return query

    @classmethod
    def get_all(cls):
        """Get all records, newest first"""
        return cls._ordered().all()

    @classmethod
    def get_by_id(cls, id):
        return db.session.get(cls.model, id)

    @classmethod
    def create(cls, **kwargs):
        try:
            item = cls.model(**kwargs)
            db.session.add(item)
            db.session.commit()
            db.session.refresh(item)
            return item
        except SQLAlchemyError:
            db.session.rollback()
            raise

    @classmethod
    def update(cls, id, **kwargs):
        item = db.session.get(cls.model, id)
        if not item:
            return None

        for key, value in kwargs.items():
            if hasattr(item, key):
                setattr(item, key, value)

        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise
        return item

    @classmethod
    def delete(cls, id):
        item = db.session.get(cls.model, id)
        if not item:
            return False

        try:
            db.session.delete(item)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise
        return True
