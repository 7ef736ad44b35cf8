"""
File-host providers and the per-provider link health status.

Every download-link set carries one URL column per provider, named
``<provider>_link``, plus a ``link_status`` map keyed by those same column
names. The link checker writes ``ACTIVE`` or ``EXPIRED`` into that map.
"""
from enum import Enum

LINK_SUFFIX = "_link"

RESOLUTIONS = ("360p", "480p", "720p", "1080p")


class Provider(Enum):
    MEGA = ("mega_link", "Mega")
    GDRIVE = ("gdrive_link", "Google Drive")
    MEDIAFIRE = ("mediafire_link", "MediaFire")
    TERABOX = ("terabox_link", "TeraBox")
    PCLOUD = ("pcloud_link", "pCloud")
    YOUTUBE = ("youtube_link", "YouTube")

    def __init__(self, key, display_name):
        self.key = key
        self.display_name = display_name

    @classmethod
    def from_key(cls, key):
        for provider in cls:
            if provider.key == key:
                return provider
        return None


PROVIDER_KEYS = tuple(p.key for p in Provider)


class LinkStatus(Enum):
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value):
        """Exact match only; 'expired' or ' EXPIRED' are not EXPIRED."""
        if isinstance(value, cls):
            return value
        for status in (cls.ACTIVE, cls.EXPIRED):
            if value == status.value:
                return status
        return cls.UNKNOWN


def provider_label(key):
    """'mega_link' -> 'mega'"""
    if key.endswith(LINK_SUFFIX):
        return key[: -len(LINK_SUFFIX)]
    return key


def provider_display_name(key):
    """'gdrive_link' -> 'Google Drive'; unknown keys fall back to the label"""
    provider = Provider.from_key(key)
    if provider is None:
        return provider_label(key)
    return provider.display_name


def parse_status_map(raw):
    """Turn a stored status map into {provider_key: LinkStatus}."""
    if not raw or not isinstance(raw, dict):
        return {}
    return {key: LinkStatus.parse(value) for key, value in raw.items()}
