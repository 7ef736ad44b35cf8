"""
Models: Download, DownloadLink
Per-content download metadata and per-resolution link sets.
"""

from db import db, new_id
from providers import PROVIDER_KEYS


class LinkSetMixin:
    """Columns shared by content and episode link sets"""

    resolution = db.Column(db.String(10), nullable=False)
    file_size = db.Column(db.String(50))
    mega_link = db.Column(db.String)
    gdrive_link = db.Column(db.String)
    mediafire_link = db.Column(db.String)
    terabox_link = db.Column(db.String)
    pcloud_link = db.Column(db.String)
    youtube_link = db.Column(db.String)

    # {"mega_link": "EXPIRED", ...}, written by the link checker
    link_status = db.Column(db.JSON)
    last_checked_at = db.Column(db.DateTime(timezone=True))

    def provider_urls(self):
        return {key: getattr(self, key) for key in PROVIDER_KEYS}

    def link_set_dict(self):
        data = {
            "id": self.id,
            "resolution": self.resolution,
            "file_size": self.file_size,
            "link_status": self.link_status,
            "last_checked_at": self.last_checked_at.isoformat() if self.last_checked_at else None,
        }
        data.update(self.provider_urls())
        return data


class Download(db.Model):
    __tablename__ = "downloads"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    movie_id = db.Column(db.String(36), db.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    quality = db.Column(db.String(20), nullable=False)
    file_size = db.Column(db.String(50))
    file_url = db.Column(db.String)

    def to_dict(self):
        return {
            "id": self.id,
            "quality": self.quality,
            "file_size": self.file_size,
            "file_url": self.file_url,
        }


class DownloadLink(LinkSetMixin, db.Model):
    __tablename__ = "download_links"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    movie_id = db.Column(db.String(36), db.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)

    def to_dict(self):
        data = self.link_set_dict()
        data["movie_id"] = self.movie_id
        return data
