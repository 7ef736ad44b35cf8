"""
Repositories for records submitted from the public site
"""

from sqlalchemy.orm import joinedload
from models.inbox import DMCARequest, ContentRequest, ContactMessage, Comment
from repositories.base import BaseRepository


class DMCARepository(BaseRepository):
    model = DMCARequest


class ContentRequestRepository(BaseRepository):
    model = ContentRequest


class ContactMessageRepository(BaseRepository):
    model = ContactMessage


class CommentRepository(BaseRepository):
    model = Comment

    @staticmethod
    def get_all():
        """Comments with the title and slug of their content"""
        return Comment.query.options(joinedload(Comment.content)).order_by(Comment.created_at.desc()).all()
