"""Seasons and episodes of series and anime records."""

import structlog
from sqlalchemy.exc import SQLAlchemyError

from constants import EPISODIC_TYPES
from db import db
from exceptions import DatabaseException, NotFoundException, ValidationException
from models.season import Episode, EpisodeDownloadLink
from repositories.content_repository import ContentRepository
from repositories.season_repository import EpisodeRepository, SeasonRepository
from services.content_service import build_link_sets
from services.site_service import delete_record
from utils import blank_to_none

logger = structlog.get_logger('seasons')


def _require_number(data, key):
    value = data.get(key)
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationException(f"{key} must be a number, got {value!r}")
    if number < 0:
        raise ValidationException(f"{key} must not be negative")
    return number


def _episodic_content(content_id):
    content = ContentRepository.get_by_id(content_id)
    if content is None:
        raise NotFoundException("Content", content_id)
    if content.type not in EPISODIC_TYPES:
        raise ValidationException(f"'{content.title}' is a {content.type}; only {EPISODIC_TYPES} have seasons")
    return content


def list_seasons(content_id):
    _episodic_content(content_id)
    return SeasonRepository.get_for_content(content_id)


def save_season(content_id, data, season_id=None):
    _episodic_content(content_id)
    fields = {
        "season_number": _require_number(data, "season_number"),
        "season_title": blank_to_none(data.get("season_title")),
        "season_zip_link": blank_to_none(data.get("season_zip_link")),
    }

    try:
        if season_id is None:
            season = SeasonRepository.create(movie_id=content_id, **fields)
        else:
            season = SeasonRepository.get_by_id(season_id)
            if season is None or season.movie_id != content_id:
                raise NotFoundException("Season", season_id)
            season = SeasonRepository.update(season_id, **fields)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error saving season {fields['season_number']}: {e}")

    logger.info("Season saved", content_id=content_id, season_id=season.id)
    return season


def save_episode(season_id, data, episode_id=None):
    """Insert or update an episode, then replace its link sets"""
    season = SeasonRepository.get_by_id(season_id)
    if season is None:
        raise NotFoundException("Season", season_id)

    episode_number = _require_number(data, "episode_number")
    links = build_link_sets(EpisodeDownloadLink, data.get("download_links") or [])

    if episode_id is None:
        episode = Episode(season_id=season_id)
        db.session.add(episode)
    else:
        episode = EpisodeRepository.get_by_id(episode_id)
        if episode is None or episode.season_id != season_id:
            raise NotFoundException("Episode", episode_id)

    episode.episode_number = episode_number
    episode.episode_title = blank_to_none(data.get("episode_title"))
    try:
        episode.download_links = links
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise DatabaseException(f"Error saving episode {episode_number}: {e}")

    logger.info("Episode saved", season_id=season_id, episode_id=episode.id, link_sets=len(links))
    return episode


def delete_season(season_id, confirmed=False):
    delete_record(SeasonRepository, "Season", season_id, confirmed)


def delete_episode(episode_id, confirmed=False):
    delete_record(EpisodeRepository, "Episode", episode_id, confirmed)
