"""
Models: Season, Episode, EpisodeDownloadLink
Seasons belong to series/anime records; episodes own their own link sets.
"""

from db import db, new_id
from models.download import LinkSetMixin


class Season(db.Model):
    __tablename__ = "seasons"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    movie_id = db.Column(db.String(36), db.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    season_number = db.Column(db.Integer, nullable=False)
    season_title = db.Column(db.String)
    season_zip_link = db.Column(db.String)

    episodes = db.relationship(
        "Episode", backref="season", cascade="all, delete-orphan", lazy=True, order_by="Episode.episode_number"
    )

    def to_dict(self, with_episodes=False):
        data = {
            "id": self.id,
            "movie_id": self.movie_id,
            "season_number": self.season_number,
            "season_title": self.season_title,
            "season_zip_link": self.season_zip_link,
        }
        if with_episodes:
            data["episodes"] = [e.to_dict(with_links=True) for e in self.episodes]
        return data


class Episode(db.Model):
    __tablename__ = "episodes"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    season_id = db.Column(db.String(36), db.ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False, index=True)
    episode_number = db.Column(db.Integer, nullable=False)
    episode_title = db.Column(db.String)

    download_links = db.relationship(
        "EpisodeDownloadLink", backref="episode", cascade="all, delete-orphan", lazy=True
    )

    def to_dict(self, with_links=False):
        data = {
            "id": self.id,
            "season_id": self.season_id,
            "episode_number": self.episode_number,
            "episode_title": self.episode_title,
        }
        if with_links:
            data["download_links"] = [l.to_dict() for l in self.download_links]
        return data


class EpisodeDownloadLink(LinkSetMixin, db.Model):
    __tablename__ = "episode_download_links"

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    episode_id = db.Column(db.String(36), db.ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True)

    def to_dict(self):
        data = self.link_set_dict()
        data["episode_id"] = self.episode_id
        return data
