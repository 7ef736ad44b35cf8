"""Dead-link report over download-link sets.

Each link set stores a ``link_status`` map of provider key to status. The
report fans every set out into one entry per provider whose status is
EXPIRED, so a set with two expired hosts shows up twice. Episode sets are
first flattened so the entry carries the series title, season and episode.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from constants import LINK_KINDS, LINK_KIND_EPISODES, LINK_KIND_MOVIES
from exceptions import ConfirmationRequiredException, DatabaseException, NotFoundException, ValidationException
from metrics import dead_links_total
from providers import LinkStatus, parse_status_map, provider_display_name, provider_label
from repositories.download_link_repository import DownloadLinkRepository

logger = structlog.get_logger('dead_links')


@dataclass
class DeadLink:
    id: str
    kind: str
    provider_key: str
    provider: str
    status: LinkStatus
    url: Optional[str] = None
    resolution: Optional[str] = None
    last_checked_at: Optional[str] = None
    title: Optional[str] = None
    season: Optional[int] = None
    episode: Optional[int] = None

    def to_dict(self):
        return {
            "id": self.id,
            "kind": self.kind,
            "provider_key": self.provider_key,
            "provider": self.provider,
            "provider_name": provider_display_name(self.provider_key),
            "status": self.status.value,
            "url": self.url,
            "resolution": self.resolution,
            "last_checked_at": self.last_checked_at,
            "title": self.title,
            "season": self.season,
            "episode": self.episode,
        }


def expired_providers(status_map) -> List[str]:
    """Provider keys whose status is exactly EXPIRED"""
    return [key for key, status in parse_status_map(status_map).items() if status is LinkStatus.EXPIRED]


def mark_provider_active(status_map, provider_key) -> Dict[str, Any]:
    """Copy of `status_map` with `provider_key` set to ACTIVE"""
    new_map = dict(status_map) if isinstance(status_map, dict) else {}
    new_map[provider_key] = LinkStatus.ACTIVE.value
    return new_map


def flatten_episode_row(row):
    """Lift series title, season and episode numbers out of the nested join"""
    episode = row.get("episode") or {}
    season = episode.get("season") or {}
    content = season.get("content") or {}
    flat = dict(row)
    flat["title"] = content.get("title")
    flat["season"] = season.get("season_number")
    flat["episode"] = episode.get("episode_number")
    return flat


def aggregate_dead_links(rows, kind=LINK_KIND_MOVIES) -> List[DeadLink]:
    """One DeadLink per (row, expired provider) pair"""
    dead = []
    for row in rows:
        status_map = row.get("link_status")
        if not status_map:
            continue

        if kind == LINK_KIND_EPISODES:
            row = flatten_episode_row(row)
            title = row.get("title")
        else:
            title = (row.get("content") or {}).get("title") or row.get("title")

        for key in expired_providers(status_map):
            dead.append(DeadLink(
                id=row.get("id"),
                kind=kind,
                provider_key=key,
                provider=provider_label(key),
                status=LinkStatus.EXPIRED,
                url=row.get(key),
                resolution=row.get("resolution"),
                last_checked_at=row.get("last_checked_at"),
                title=title,
                season=row.get("season"),
                episode=row.get("episode"),
            ))
    return dead


def link_row(link, kind):
    """Serialize a link set with the nested relations the report reads"""
    row = link.to_dict()
    if kind == LINK_KIND_EPISODES:
        episode = link.episode
        season = episode.season if episode else None
        content = season.content if season else None
        row["episode"] = {
            "episode_number": episode.episode_number if episode else None,
            "season": {
                "season_number": season.season_number if season else None,
                "content": {"title": content.title} if content else None,
            },
        }
    else:
        row["content"] = {"title": link.content.title} if link.content else None
    return row


def validate_kind(kind):
    if kind not in LINK_KINDS:
        raise ValidationException(f"Unknown link kind '{kind}', expected one of {LINK_KINDS}")
    return kind


class DeadLinkService:

    def list_dead_links(self, kind=LINK_KIND_MOVIES) -> List[DeadLink]:
        validate_kind(kind)
        try:
            if kind == LINK_KIND_EPISODES:
                links = DownloadLinkRepository.get_episode_links()
            else:
                links = DownloadLinkRepository.get_movie_links()
        except SQLAlchemyError as e:
            logger.error("Fetching link sets failed", kind=kind, error=str(e))
            raise DatabaseException(f"Error fetching {kind} link sets: {e}")

        dead = aggregate_dead_links([link_row(l, kind) for l in links], kind)
        dead_links_total.labels(kind=kind).set(len(dead))
        return dead

    def mark_active(self, kind, row_id, provider_key, current_status=None, confirmed=False):
        """Flip one provider back to ACTIVE and write the whole map back"""
        validate_kind(kind)
        if not confirmed:
            raise ConfirmationRequiredException(f"Mark {provider_key} as ACTIVE manually? Resend with confirm=true.")
        if not provider_key:
            raise ValidationException("provider_key is required")

        link = DownloadLinkRepository.get_by_id(kind, row_id)
        if link is None:
            raise NotFoundException("Download link", row_id)

        if current_status is None:
            current_status = link.link_status
        elif not isinstance(current_status, dict):
            raise ValidationException("current_status must be an object of provider key to status")
        new_status = mark_provider_active(current_status, provider_key)

        try:
            DownloadLinkRepository.set_link_status(kind, row_id, new_status)
        except SQLAlchemyError as e:
            logger.error("Updating link status failed", kind=kind, id=row_id, error=str(e))
            raise DatabaseException(f"Error updating link status of {row_id}: {e}")

        logger.info("Provider marked active", kind=kind, id=row_id, provider=provider_key)
        return new_status
