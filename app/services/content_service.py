"""Saving content records from the full edit form, plus the running tracker.

A save always carries the whole form. Scalar fields are rewritten, and the
category links, downloads, screenshots and per-resolution link sets are
replaced wholesale by what was submitted.
"""

import structlog
from sqlalchemy.exc import SQLAlchemyError

from constants import (
    CONTENT_TYPES,
    CONTENT_TYPE_MOVIE,
    DEFAULT_FORMAT,
    DEFAULT_LANGUAGE,
    DEFAULT_SOURCE,
    DEFAULT_SUBTITLE,
)
from db import db
from exceptions import ConfirmationRequiredException, DatabaseException, NotFoundException, ValidationException
from models.content import Content
from models.download import Download, DownloadLink
from models.screenshot import Screenshot
from providers import PROVIDER_KEYS, RESOLUTIONS
from repositories.category_repository import CategoryRepository
from repositories.content_repository import ContentRepository
from utils import blank_to_none, build_slug, now_utc, parse_bool, slugify

logger = structlog.get_logger('content')

SCALAR_FIELDS = (
    "description",
    "poster_url",
    "banner_url_desktop",
    "banner_url_mobile",
    "cast_members",
    "trailer_url",
)


def _parse_year(value):
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationException(f"release_year must be a number, got {value!r}")


def build_link_sets(model, links, **owner):
    """Link-set rows for every submitted resolution that has at least one URL.

    `links` is either a list of link dicts or a mapping resolution -> dict,
    which is how the editor holds one tab per resolution.
    """
    if isinstance(links, dict):
        for res, link in links.items():
            if not isinstance(link, dict):
                raise ValidationException(f"Download links for '{res}' must be an object")
        links = [dict(link, resolution=link.get("resolution") or res) for res, link in links.items()]
    elif links and not isinstance(links, list):
        raise ValidationException("download_links must be a list or an object keyed by resolution")

    rows = []
    for link in links or []:
        if not isinstance(link, dict):
            raise ValidationException(f"Each download link set must be an object, got {link!r}")
        resolution = link.get("resolution")
        if resolution not in RESOLUTIONS:
            raise ValidationException(f"Unknown resolution '{resolution}', expected one of {list(RESOLUTIONS)}")

        urls = {key: blank_to_none(link.get(key)) for key in PROVIDER_KEYS}
        if not any(urls.values()):
            continue
        rows.append(model(resolution=resolution, file_size=blank_to_none(link.get("file_size")), **urls, **owner))
    return rows


def validate_content(data, existing=None):
    title = (data.get("title") or "").strip()
    if not title:
        raise ValidationException("Title is required")

    content_type = data.get("type") or (existing.type if existing else CONTENT_TYPE_MOVIE)
    if content_type not in CONTENT_TYPES:
        raise ValidationException(f"Unknown content type '{content_type}', expected one of {CONTENT_TYPES}")

    release_year = _parse_year(data.get("release_year"))

    slug = slugify(data.get("slug") or "")
    if not slug:
        slug = existing.slug if existing else build_slug(title, release_year)
    if not slug:
        raise ValidationException("Could not derive a slug from the title")
    if ContentRepository.slug_taken(slug, exclude_id=existing.id if existing else None):
        raise ValidationException(f"Slug '{slug}' is already used by another record")

    return title, content_type, release_year, slug


def save_content(data, content_id=None):
    """Insert a new record, or rewrite an existing one, from form data"""
    existing = None
    if content_id:
        existing = ContentRepository.get_full(content_id)
        if existing is None:
            raise NotFoundException("Content", content_id)

    title, content_type, release_year, slug = validate_content(data, existing)
    link_rows = build_link_sets(DownloadLink, data["download_links"]) if "download_links" in data else None
    content = existing or Content()

    content.title = title
    content.slug = slug
    content.type = content_type
    content.release_year = release_year
    for name in SCALAR_FIELDS:
        setattr(content, name, blank_to_none(data.get(name)))
    content.language = data.get("language") or DEFAULT_LANGUAGE
    content.source = data.get("source") or DEFAULT_SOURCE
    content.format = data.get("format") or DEFAULT_FORMAT
    content.subtitle = data.get("subtitle") or DEFAULT_SUBTITLE
    if "is_running" in data:
        content.is_running = parse_bool(data.get("is_running"))

    try:
        if existing is None:
            db.session.add(content)

        content.categories = CategoryRepository.get_by_ids(data.get("categories") or [])
        content.downloads = [
            Download(
                quality=d.get("quality") or "720p",
                file_size=blank_to_none(d.get("file_size")),
                file_url=blank_to_none(d.get("file_url")),
            )
            for d in data.get("downloads") or []
        ]
        content.screenshots = [
            Screenshot(image_url=url, position=i)
            for i, url in enumerate(u for u in data.get("screenshots") or [] if u)
        ]
        db.session.flush()

        if link_rows is not None:
            _replace_download_links(content, link_rows)

        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        raise DatabaseException(f"Error saving content '{title}': {e}")

    logger.info("Content saved", content_id=content.id, created=existing is None)
    return content


def _replace_download_links(content, rows):
    """Link sets are saved on a savepoint; failing here does not block the save"""
    try:
        with db.session.begin_nested():
            content.download_links = rows
            db.session.flush()
    except SQLAlchemyError as e:
        logger.warning("Download links save failed", content_id=content.id, error=str(e))


def list_content(page=1, per_page=50, content_type=None):
    if content_type and content_type not in CONTENT_TYPES:
        raise ValidationException(f"Unknown content type '{content_type}'")
    return ContentRepository.get_page(page=page, per_page=per_page, content_type=content_type)


def get_content(content_id):
    content = ContentRepository.get_full(content_id)
    if content is None:
        raise NotFoundException("Content", content_id)
    return content


def create_category(name):
    name = (name or "").strip()
    if not name:
        raise ValidationException("Category name is required")
    if CategoryRepository.get_by_name(name):
        raise ValidationException(f"Category '{name}' already exists")
    try:
        return CategoryRepository.create(name=name, slug=slugify(name))
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error creating category '{name}': {e}")


# Running tracker


def list_running():
    return ContentRepository.get_running()


def mark_episode_done(content_id):
    """Advance the tracker: last_episode + 1, next_episode one after that"""
    content = ContentRepository.get_by_id(content_id)
    if content is None:
        raise NotFoundException("Content", content_id)

    new_last = (content.last_episode or 0) + 1
    try:
        ContentRepository.update(
            content_id,
            last_episode=new_last,
            next_episode=new_last + 1,
            updated_at=now_utc(),
        )
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error updating task {content_id}: {e}")
    return content


def stop_tracking(content_id, confirmed=False):
    if not confirmed:
        raise ConfirmationRequiredException("Stop tracking this series? Resend with confirm=true.")
    try:
        content = ContentRepository.update(content_id, is_running=False)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error updating task {content_id}: {e}")
    if content is None:
        raise NotFoundException("Content", content_id)
    return content
