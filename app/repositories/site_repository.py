"""
Repositories for site content: ads, notices, chatbot FAQs and settings
"""

from sqlalchemy.exc import SQLAlchemyError
from db import db
from models.ad import Ad
from models.notice import Notice
from models.chatbot import ChatbotSettings, FAQ
from models.site_settings import AppSettings, TelegramSettings
from repositories.base import BaseRepository

SINGLETON_ID = 1


class AdRepository(BaseRepository):
    model = Ad


class NoticeRepository(BaseRepository):
    model = Notice

    @staticmethod
    def toggle_active(id):
        """Flip is_active and return the notice, or None when absent"""
        item = db.session.get(Notice, id)
        if not item:
            return None
        try:
            item.is_active = not item.is_active
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise
        return item


class FAQRepository(BaseRepository):
    model = FAQ


class SingletonRepository:
    """Tables holding exactly one row (id = 1), created on first access"""

    model = None

    @classmethod
    def get(cls):
        item = db.session.get(cls.model, SINGLETON_ID)
        if item:
            return item
        try:
            item = cls.model(id=SINGLETON_ID)
            db.session.add(item)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise
        return item

    @classmethod
    def update(cls, **kwargs):
        item = cls.get()
        for key, value in kwargs.items():
            if hasattr(item, key) and key != "id":
                setattr(item, key, value)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise
        return item


class ChatbotSettingsRepository(SingletonRepository):
    model = ChatbotSettings


class AppSettingsRepository(SingletonRepository):
    model = AppSettings


class TelegramSettingsRepository(SingletonRepository):
    model = TelegramSettings
