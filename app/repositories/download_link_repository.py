"""
Repository for download-link sets (content level and episode level)
"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload
from db import db
from constants import LINK_KIND_MOVIES, LINK_KIND_EPISODES
from models.download import DownloadLink
from models.season import Season, Episode, EpisodeDownloadLink

LINK_MODELS = {
    LINK_KIND_MOVIES: DownloadLink,
    LINK_KIND_EPISODES: EpisodeDownloadLink,
}


def link_model(kind):
    try:
        return LINK_MODELS[kind]
    except KeyError:
        raise ValueError(f"Unknown link kind: {kind}")


class DownloadLinkRepository:
    """Repository for DownloadLink and EpisodeDownloadLink operations"""

    @staticmethod
    def get_by_id(kind, id):
        return db.session.get(link_model(kind), id)

    @staticmethod
    def get_movie_links():
        """Content link sets joined with their content, last checked first"""
        return (
            DownloadLink.query.options(joinedload(DownloadLink.content))
            .order_by(DownloadLink.last_checked_at.desc())
            .all()
        )

    @staticmethod
    def get_episode_links():
        """Episode link sets joined through episode -> season -> content"""
        return (
            EpisodeDownloadLink.query.options(
                joinedload(EpisodeDownloadLink.episode)
                .joinedload(Episode.season)
                .joinedload(Season.content)
            )
            .order_by(EpisodeDownloadLink.last_checked_at.desc())
            .all()
        )

    @staticmethod
    def set_link_status(kind, id, status_map):
        """Replace the whole status map of one link set"""
        item = db.session.get(link_model(kind), id)
        if not item:
            return None

        try:
            item.link_status = dict(status_map)
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            raise
        return item
