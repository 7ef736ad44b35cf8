"""
Model: Content
A catalog entry (movie, series or anime) and the rows it owns directly.
"""

from db import db, new_id, now_utc
from constants import CONTENT_TYPE_MOVIE


movie_categories = db.Table(
    "movie_categories",
    db.Column("movie_id", db.String(36), db.ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
    db.Column("category_id", db.String(36), db.ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True),
)


class Content(db.Model):
    __tablename__ = "movies"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    title = db.Column(db.String, nullable=False)
    slug = db.Column(db.String, unique=True, nullable=False, index=True)
    description = db.Column(db.Text)
    type = db.Column(db.String(10), nullable=False, default=CONTENT_TYPE_MOVIE)
    release_year = db.Column(db.Integer)

    # Images live in the object store; these hold their public URLs
    poster_url = db.Column(db.String)
    banner_url_desktop = db.Column(db.String)
    banner_url_mobile = db.Column(db.String)

    language = db.Column(db.String)
    source = db.Column(db.String)
    cast_members = db.Column(db.Text)
    format = db.Column(db.String)
    subtitle = db.Column(db.String)
    trailer_url = db.Column(db.String)

    # Running tracker for series still airing
    is_running = db.Column(db.Boolean, default=False, nullable=False)
    last_episode = db.Column(db.Integer)
    next_episode = db.Column(db.Integer)

    created_at = db.Column(db.DateTime(timezone=True), default=now_utc)
    updated_at = db.Column(db.DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    downloads = db.relationship("Download", backref="content", cascade="all, delete-orphan", lazy=True)
    download_links = db.relationship("DownloadLink", backref="content", cascade="all, delete-orphan", lazy=True)
    screenshots = db.relationship(
        "Screenshot", backref="content", cascade="all, delete-orphan", lazy=True, order_by="Screenshot.position"
    )
    seasons = db.relationship(
        "Season", backref="content", cascade="all, delete-orphan", lazy=True, order_by="Season.season_number"
    )
    comments = db.relationship("Comment", backref="content", cascade="all, delete-orphan", lazy=True)
    categories = db.relationship("Category", secondary=movie_categories, backref=db.backref("contents", lazy="dynamic"))

    def image_urls(self):
        """Every stored image URL of this record, poster first"""
        urls = [self.poster_url, self.banner_url_desktop, self.banner_url_mobile]
        urls.extend(s.image_url for s in self.screenshots)
        return [u for u in urls if u]

    def to_dict(self, full=False):
        data = {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "type": self.type,
            "release_year": self.release_year,
            "poster_url": self.poster_url,
            "banner_url_desktop": self.banner_url_desktop,
            "banner_url_mobile": self.banner_url_mobile,
            "language": self.language,
            "source": self.source,
            "cast_members": self.cast_members,
            "format": self.format,
            "subtitle": self.subtitle,
            "trailer_url": self.trailer_url,
            "is_running": self.is_running,
            "last_episode": self.last_episode,
            "next_episode": self.next_episode,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
        if full:
            data["downloads"] = [d.to_dict() for d in self.downloads]
            data["download_links"] = [l.to_dict() for l in self.download_links]
            data["screenshots"] = [s.to_dict() for s in self.screenshots]
            data["categories"] = [c.to_dict() for c in self.categories]
        return data
