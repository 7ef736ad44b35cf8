"""Delete a content record together with the storage objects it owns.

Order of operations:

1. refuse unless the caller confirmed the (irreversible) deletion;
2. collect the poster, banner and screenshot URLs of the record and map each
   to a bucket-relative storage path, skipping URLs of any other shape;
3. remove those objects with one bulk call per bucket; a failure here is
   logged and the deletion carries on;
4. delete the content row; the database cascades to downloads, link sets,
   screenshots, seasons, episodes, comments and category links;
5. drop the record from the caller's listing.

Storage removal is not rolled back if step 4 fails. An orphaned object is
acceptable; an orphaned catalog row is not.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError

from db import db
from exceptions import ConfirmationRequiredException, DatabaseException, NotFoundException, StorageException
from metrics import content_deletions_total, storage_cleanup_failures_total, storage_objects_removed_total
from repositories.content_repository import ContentRepository
from storage import ObjectStore, StoragePath

logger = structlog.get_logger('content_deletion')


@dataclass
class DeletionResult:
    content_id: str
    removed_paths: List[StoragePath] = field(default_factory=list)
    storage_error: Optional[str] = None

    def to_dict(self):
        return {
            "content_id": self.content_id,
            "removed_paths": [f"{p.bucket}/{p.path}" for p in self.removed_paths],
            "storage_error": self.storage_error,
        }


class ContentDeletionService:
    def __init__(self, store: ObjectStore):
        self.store = store

    def collect_storage_paths(self, content) -> List[StoragePath]:
        paths = []
        for url in content.image_urls():
            path = self.store.path_of(url)
            if path is None:
                logger.debug("Skipping URL outside the object store", content_id=content.id, url=url)
                continue
            if path not in paths:
                paths.append(path)
        return paths

    def delete(self, content_id, rows=None, confirmed=False) -> DeletionResult:
        """Delete one content record.

        `rows` is the listing the caller is showing (a list of dicts with an
        "id" key); it is only touched once the row is gone from the database.
        """
        if not confirmed:
            raise ConfirmationRequiredException(
                "Deleting content cannot be undone. Resend with confirm=true."
            )

        content = ContentRepository.get_with_images(content_id)
        if content is None:
            raise NotFoundException("Content", content_id)

        result = DeletionResult(content_id=content_id)
        paths = self.collect_storage_paths(content)

        if paths:
            try:
                self.store.remove(paths)
                result.removed_paths = paths
                storage_objects_removed_total.inc(len(paths))
            except StorageException as e:
                storage_cleanup_failures_total.inc()
                result.storage_error = e.message
                logger.warning(
                    "Storage cleanup failed, deleting catalog row anyway",
                    content_id=content_id,
                    paths=len(paths),
                    error=e.message,
                )

        try:
            db.session.delete(content)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            content_deletions_total.labels(status="failed").inc()
            raise DatabaseException(f"Error deleting content {content_id}: {e}")

        content_deletions_total.labels(status="deleted").inc()
        logger.info("Content deleted", content_id=content_id, storage_objects=len(result.removed_paths))

        if rows is not None:
            rows[:] = [r for r in rows if r.get("id") != content_id]

        return result
