"""
Object store access for catalog images.

Every image URL saved on a catalog row is a public object URL of the form
``<base>/storage/v1/object/public/<bucket>/<path>``. The store turns uploaded
files into such URLs, maps URLs back to bucket-relative paths, and removes
objects in bulk.
"""
import os
import re
import uuid
import logging
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Dict, Iterable, List, NamedTuple, Optional
from urllib.parse import unquote

import requests

from exceptions import StorageException, ValidationException
from utils import allowed_image

logger = logging.getLogger('main')

PUBLIC_OBJECT_PATTERN = re.compile(r'/object/public/(?P<bucket>[^/?#]+)/(?P<path>[^?#]+)')


class StoragePath(NamedTuple):
    bucket: str
    path: str


def parse_public_url(url: Optional[str]) -> Optional[StoragePath]:
    """Match the public object URL shape; anything else yields None."""
    if not url:
        return None
    match = PUBLIC_OBJECT_PATTERN.search(url)
    if not match:
        return None
    bucket = unquote(match.group('bucket'))
    path = unquote(match.group('path')).strip('/')
    if not bucket or not path:
        return None
    return StoragePath(bucket, path)


def group_by_bucket(paths: Iterable[StoragePath]) -> Dict[str, List[str]]:
    grouped = OrderedDict()
    for p in paths:
        grouped.setdefault(p.bucket, []).append(p.path)
    return grouped


def generate_object_name(filename: str) -> str:
    if not allowed_image(filename):
        raise ValidationException(f"Unsupported image type: {filename}")
    ext = os.path.splitext(filename)[1].lower()
    return f"{uuid.uuid4().hex}{ext}"


class ObjectStore(ABC):
    @abstractmethod
    def store(self, file, bucket: str) -> str:
        """Upload a file and return its public URL"""

    @abstractmethod
    def remove(self, paths: List[StoragePath]) -> None:
        """Remove objects, one bulk call per bucket"""

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        pass

    def path_of(self, url: Optional[str]) -> Optional[StoragePath]:
        return parse_public_url(url)


class SupabaseStorage(ObjectStore):
    """Hosted storage REST API (``/storage/v1``)"""

    def __init__(self, base_url: str, service_key: str, session: requests.Session = None, timeout: int = 30):
        self.base_url = base_url.rstrip('/')
        self.service_key = service_key
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self, content_type=None):
        headers = {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
        }
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def public_url(self, bucket, path):
        return f"{self.base_url}/storage/v1/object/public/{bucket}/{path}"

    def store(self, file, bucket):
        name = generate_object_name(file.filename)
        url = f"{self.base_url}/storage/v1/object/{bucket}/{name}"
        try:
            r = self.session.post(
                url,
                data=file.stream.read(),
                headers=self._headers(file.mimetype or "application/octet-stream"),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise StorageException(f"Upload of {file.filename} failed: {e}")

        if not r.ok:
            raise StorageException(f"Upload of {file.filename} failed ({r.status_code}): {r.text}")

        logger.info(f"Uploaded {file.filename} to {bucket}/{name}")
        return self.public_url(bucket, name)

    def remove(self, paths):
        for bucket, bucket_paths in group_by_bucket(paths).items():
            try:
                r = self.session.delete(
                    f"{self.base_url}/storage/v1/object/{bucket}",
                    json={"prefixes": bucket_paths},
                    headers=self._headers("application/json"),
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                raise StorageException(f"Bulk delete in bucket {bucket} failed: {e}")

            if not r.ok:
                raise StorageException(f"Bulk delete in bucket {bucket} failed ({r.status_code}): {r.text}")
            logger.info(f"Removed {len(bucket_paths)} object(s) from bucket {bucket}")


class LocalStorage(ObjectStore):
    """Directory-backed store for development, using the same URL shape"""

    def __init__(self, root: str, public_base_url: str):
        self.root = root
        self.public_base_url = public_base_url.rstrip('/')

    def public_url(self, bucket, path):
        return f"{self.public_base_url}/storage/v1/object/public/{bucket}/{path}"

    def _resolve(self, bucket, path):
        bucket_dir = os.path.realpath(os.path.join(self.root, bucket))
        full_path = os.path.realpath(os.path.join(bucket_dir, path))
        if not full_path.startswith(bucket_dir + os.sep):
            raise StorageException(f"Path escapes bucket {bucket}: {path}")
        return full_path

    def store(self, file, bucket):
        name = generate_object_name(file.filename)
        target = self._resolve(bucket, name)
        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, 'wb') as f:
                f.write(file.stream.read())
        except OSError as e:
            raise StorageException(f"Upload of {file.filename} failed: {e}")
        return self.public_url(bucket, name)

    def remove(self, paths):
        for bucket, bucket_paths in group_by_bucket(paths).items():
            for path in bucket_paths:
                try:
                    os.remove(self._resolve(bucket, path))
                except FileNotFoundError:
                    logger.debug(f"Object {bucket}/{path} already gone")
                except OSError as e:
                    raise StorageException(f"Removing {bucket}/{path} failed: {e}")


def build_object_store(storage_settings) -> ObjectStore:
    backend = storage_settings.get("backend", "local")
    if backend == "supabase":
        if not storage_settings.get("supabase_url") or not storage_settings.get("service_key"):
            raise ValidationException("Supabase storage requires supabase_url and service_key")
        return SupabaseStorage(
            storage_settings["supabase_url"],
            storage_settings["service_key"],
            timeout=storage_settings.get("timeout", 30),
        )
    if backend == "local":
        return LocalStorage(storage_settings["local_root"], storage_settings["public_base_url"])
    raise ValidationException(f"Unknown storage backend: {backend}")


def get_object_store() -> ObjectStore:
    """The store created by the application factory"""
    from flask import current_app

    return current_app.extensions["object_store"]
