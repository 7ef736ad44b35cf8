"""
Model: Ad
"""

from db import db, new_id, now_utc


class Ad(db.Model):
    __tablename__ = "ads"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String, nullable=False)
    placement = db.Column(db.String(30), nullable=False)
    ad_type = db.Column(db.String(10), nullable=False)
    image_url = db.Column(db.String)
    script_code = db.Column(db.Text)
    destination_url = db.Column(db.String)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "placement": self.placement,
            "ad_type": self.ad_type,
            "image_url": self.image_url,
            "script_code": self.script_code,
            "destination_url": self.destination_url,
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
