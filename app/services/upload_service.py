"""Image uploads to the object store.

Bulk uploads run one store() call per file on a thread pool and wait for all
of them. A file that fails is logged and left out of the result; nothing is
retried.
"""

from concurrent.futures import ThreadPoolExecutor

import structlog

from exceptions import NexiplayException, ValidationException
from metrics import uploads_total

logger = structlog.get_logger('uploads')

DEFAULT_MAX_WORKERS = 4


def upload_image(store, file, bucket):
    """Upload a single file and return its public URL"""
    if file is None or not file.filename:
        raise ValidationException("No file provided")
    try:
        url = store.store(file, bucket)
    except NexiplayException:
        uploads_total.labels(status="failed").inc()
        raise
    uploads_total.labels(status="ok").inc()
    return url


def _try_upload(store, file, bucket):
    try:
        return upload_image(store, file, bucket)
    except NexiplayException as e:
        logger.warning("Upload failed, dropping file", filename=getattr(file, "filename", None), error=e.message)
        return None


def upload_images(store, files, bucket, max_workers=DEFAULT_MAX_WORKERS):
    """Upload files in parallel; URLs of the successful ones, in input order"""
    files = [f for f in files if f is not None and f.filename]
    if not files:
        return []

    with ThreadPoolExecutor(max_workers=min(max_workers, len(files))) as executor:
        results = list(executor.map(lambda f: _try_upload(store, f, bucket), files))

    urls = [url for url in results if url]
    logger.info("Bulk upload finished", requested=len(files), uploaded=len(urls))
    return urls
