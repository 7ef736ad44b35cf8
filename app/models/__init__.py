"""
Models package

One module per concern of the catalog:
- content.py (Content, movie_categories)
- download.py, screenshot.py, season.py
- ad.py, notice.py, chatbot.py, inbox.py, site_settings.py

Usage:
    from models import Content, DownloadLink
"""

from .content import Content, movie_categories
from .category import Category
from .download import Download, DownloadLink
from .screenshot import Screenshot
from .season import Season, Episode, EpisodeDownloadLink
from .ad import Ad
from .notice import Notice
from .chatbot import ChatbotSettings, FAQ
from .inbox import DMCARequest, ContentRequest, ContactMessage, Comment
from .site_settings import AppSettings, TelegramSettings

__all__ = [
    "Content",
    "movie_categories",
    "Category",
    "Download",
    "DownloadLink",
    "Screenshot",
    "Season",
    "Episode",
    "EpisodeDownloadLink",
    "Ad",
    "Notice",
    "ChatbotSettings",
    "FAQ",
    "DMCARequest",
    "ContentRequest",
    "ContactMessage",
    "Comment",
    "AppSettings",
    "TelegramSettings",
]
