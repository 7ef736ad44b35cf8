"""
Model: Notice
Site-wide banners shown as a top bar or popup.
"""

from db import db, new_id, now_utc


class Notice(db.Model):
    __tablename__ = "notices"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    content = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), nullable=False, default="top_bar")
    pages = db.Column(db.String(20), nullable=False, default="all")
    bg_color = db.Column(db.String(30), default="bg-red-600")  # Hex or utility class
    text_color = db.Column(db.String(30), default="text-white")
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        return {
            "id": self.id,
            "content": self.content,
            "type": self.type,
            "pages": self.pages,
            "bg_color": self.bg_color,
            "text_color": self.text_color,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
