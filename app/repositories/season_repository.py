"""
Repository for Season and Episode database operations
"""

from sqlalchemy.orm import selectinload
from models.season import Season, Episode
from repositories.base import BaseRepository


class SeasonRepository(BaseRepository):
    """Repository for Season database operations"""

    model = Season

    @staticmethod
    def get_for_content(content_id):
        """Seasons of one record with episodes and their link sets"""
        return (
            Season.query.options(selectinload(Season.episodes).selectinload(Episode.download_links))
            .filter(Season.movie_id == content_id)
            .order_by(Season.season_number)
            .all()
        )


class EpisodeRepository(BaseRepository):
    """Repository for Episode database operations"""

    model = Episode
