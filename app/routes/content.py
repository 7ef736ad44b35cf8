"""
Content Routes - catalog records, running tracker, categories and image uploads
"""

from flask import Blueprint, request
import logging

from api_responses import success_response, paginated_response
from middleware.auth import admin_required
from middleware.confirm import is_confirmed
from repositories.category_repository import CategoryRepository
from services import content_service
from services.content_deletion import ContentDeletionService
from services.upload_service import upload_image, upload_images
from settings import load_settings
from storage import get_object_store

logger = logging.getLogger("main")

content_bp = Blueprint("content", __name__, url_prefix="/api")

MAX_PER_PAGE = 200


def _json_body():
    return request.get_json(silent=True) or {}


@content_bp.route("/content", methods=["GET"])
@admin_required
def list_content():
    page = max(1, request.args.get("page", 1, type=int))
    per_page = min(max(1, request.args.get("per_page", 50, type=int)), MAX_PER_PAGE)
    items, total = content_service.list_content(page=page, per_page=per_page, content_type=request.args.get("type"))
    return paginated_response([c.to_dict() for c in items], total, page, per_page)


@content_bp.route("/content/<content_id>", methods=["GET"])
@admin_required
def get_content(content_id):
    content = content_service.get_content(content_id)
    return success_response(content.to_dict(full=True))


@content_bp.route("/content", methods=["POST"])
@admin_required
def create_content():
    content = content_service.save_content(_json_body())
    return success_response(content.to_dict(full=True), message="Content created", status_code=201)


@content_bp.route("/content/<content_id>", methods=["PUT"])
@admin_required
def update_content(content_id):
    content = content_service.save_content(_json_body(), content_id=content_id)
    return success_response(content.to_dict(full=True), message="Content updated")


@content_bp.route("/content/<content_id>", methods=["DELETE"])
@admin_required
def delete_content(content_id):
    service = ContentDeletionService(get_object_store())
    result = service.delete(content_id, confirmed=is_confirmed())
    return success_response(result.to_dict(), message="Content deleted")


# Running tracker


@content_bp.route("/running", methods=["GET"])
@admin_required
def list_running():
    return success_response([c.to_dict() for c in content_service.list_running()])


@content_bp.route("/running/<content_id>/episode-done", methods=["POST"])
@admin_required
def mark_episode_done(content_id):
    content = content_service.mark_episode_done(content_id)
    return success_response(content.to_dict())


@content_bp.route("/running/<content_id>/stop", methods=["POST"])
@admin_required
def stop_tracking(content_id):
    content = content_service.stop_tracking(content_id, confirmed=is_confirmed())
    return success_response(content.to_dict(), message="Tracking stopped")


# Categories


@content_bp.route("/categories", methods=["GET"])
@admin_required
def list_categories():
    return success_response([c.to_dict() for c in CategoryRepository.get_all()])


@content_bp.route("/categories", methods=["POST"])
@admin_required
def create_category():
    category = content_service.create_category(_json_body().get("name"))
    return success_response(category.to_dict(), status_code=201)


# Uploads


def _image_bucket():
    return load_settings()["storage"]["poster_bucket"]


@content_bp.route("/uploads/poster", methods=["POST"])
@admin_required
def upload_poster():
    url = upload_image(get_object_store(), request.files.get("file"), _image_bucket())
    return success_response({"url": url}, status_code=201)


@content_bp.route("/uploads/screenshots", methods=["POST"])
@admin_required
def upload_screenshots():
    files = request.files.getlist("files")
    max_workers = load_settings()["uploads"]["max_workers"]
    urls = upload_images(get_object_store(), files, _image_bucket(), max_workers=max_workers)
    logger.info(f"Uploaded {len(urls)} of {len(files)} screenshot(s)")
    return success_response({"urls": urls}, status_code=201)
