"""
Repository for Content database operations
"""

from sqlalchemy.orm import selectinload
from db import db
from models.content import Content
from repositories.base import BaseRepository


class ContentRepository(BaseRepository):
    """Repository for Content database operations"""

    model = Content

    @staticmethod
    def get_page(page=1, per_page=50, content_type=None):
        """Get a page of content rows, newest first, with the total count"""
        query = Content.query
        if content_type:
            query = query.filter(Content.type == content_type)
        total = query.count()
        items = (
            query.order_by(Content.created_at.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return items, total

    @staticmethod
    def get_full(id):
        """Get a content row with every dependent the edit form needs"""
        return (
            Content.query.options(
                selectinload(Content.downloads),
                selectinload(Content.download_links),
                selectinload(Content.screenshots),
                selectinload(Content.categories),
            )
            .filter(Content.id == id)
            .first()
        )

    @staticmethod
    def get_with_images(id):
        """Get a content row with its screenshot set loaded"""
        return Content.query.options(selectinload(Content.screenshots)).filter(Content.id == id).first()

    @staticmethod
    def slug_taken(slug, exclude_id=None):
        query = Content.query.filter(Content.slug == slug)
        if exclude_id:
            query = query.filter(Content.id != exclude_id)
        return db.session.query(query.exists()).scalar()

    @staticmethod
    def get_running():
        """Series currently tracked as airing, most recently touched first"""
        return Content.query.filter(Content.is_running.is_(True)).order_by(Content.updated_at.desc()).all()
