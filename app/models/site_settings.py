"""
Models: AppSettings, TelegramSettings
Single-row tables (id = 1) holding site-wide switches.
"""

from db import db, now_utc


class AppSettings(db.Model):
    __tablename__ = "app_settings"

    id = db.Column(db.Integer, primary_key=True)
    is_ads_enabled = db.Column(db.Boolean, default=False, nullable=False)
    popunder_url = db.Column(db.String)
    direct_link_url = db.Column(db.String)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        return {
            "id": self.id,
            "is_ads_enabled": self.is_ads_enabled,
            "popunder_url": self.popunder_url,
            "direct_link_url": self.direct_link_url,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class TelegramSettings(db.Model):
    __tablename__ = "telegram_settings"

    id = db.Column(db.Integer, primary_key=True)
    telegram_type = db.Column(db.String(20), default="channel", nullable=False)
    telegram_url = db.Column(db.String)
    is_active = db.Column(db.Boolean, default=False, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        return {
            "id": self.id,
            "telegram_type": self.telegram_type,
            "telegram_url": self.telegram_url,
            "is_active": self.is_active,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
