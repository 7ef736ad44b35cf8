"""
Repository for Category database operations
"""

from models.category import Category
from repositories.base import BaseRepository


class CategoryRepository(BaseRepository):
    """Repository for Category database operations"""

    model = Category

    @staticmethod
    def get_all():
        return Category.query.order_by(Category.name).all()

    @staticmethod
    def get_by_ids(ids):
        """Get Categories by a list of IDs"""
        if not ids:
            return []
        return Category.query.filter(Category.id.in_(ids)).all()

    @staticmethod
    def get_by_name(name):
        return Category.query.filter_by(name=name).first()
