"""
Inbox Routes - DMCA notices, content requests, contact messages and comments
"""

from flask import Blueprint, request

from api_responses import success_response
from constants import CONTENT_REQUEST_STATUSES, DMCA_STATUSES
from middleware.auth import admin_required
from middleware.confirm import is_confirmed
from repositories.inbox_repository import (
    CommentRepository,
    ContactMessageRepository,
    ContentRequestRepository,
    DMCARepository,
)
from services.site_service import delete_record, save_record, status_value

inbox_bp = Blueprint("inbox", __name__, url_prefix="/api")


# DMCA


@inbox_bp.route("/dmca", methods=["GET"])
@admin_required
def list_dmca():
    return success_response([d.to_dict() for d in DMCARepository.get_all()])


@inbox_bp.route("/dmca/<request_id>/status", methods=["POST"])
@admin_required
def set_dmca_status(request_id):
    status = status_value(request.get_json(silent=True) or {}, DMCA_STATUSES)
    item = save_record(DMCARepository, "DMCA request", {"status": status}, item_id=request_id)
    return success_response(item.to_dict())


@inbox_bp.route("/dmca/<request_id>", methods=["DELETE"])
@admin_required
def delete_dmca(request_id):
    delete_record(DMCARepository, "DMCA request", request_id, confirmed=is_confirmed())
    return success_response(message="DMCA request deleted")


# Content requests


@inbox_bp.route("/requests", methods=["GET"])
@admin_required
def list_requests():
    return success_response([r.to_dict() for r in ContentRequestRepository.get_all()])


@inbox_bp.route("/requests/<request_id>/status", methods=["POST"])
@admin_required
def set_request_status(request_id):
    status = status_value(request.get_json(silent=True) or {}, CONTENT_REQUEST_STATUSES)
    item = save_record(ContentRequestRepository, "Content request", {"status": status}, item_id=request_id)
    return success_response(item.to_dict())


@inbox_bp.route("/requests/<request_id>", methods=["DELETE"])
@admin_required
def delete_request(request_id):
    delete_record(ContentRequestRepository, "Content request", request_id, confirmed=is_confirmed())
    return success_response(message="Request deleted")


# Contact messages


@inbox_bp.route("/messages", methods=["GET"])
@admin_required
def list_messages():
    return success_response([m.to_dict() for m in ContactMessageRepository.get_all()])


@inbox_bp.route("/messages/<message_id>", methods=["DELETE"])
@admin_required
def delete_message(message_id):
    delete_record(ContactMessageRepository, "Message", message_id, confirmed=is_confirmed())
    return success_response(message="Message deleted")


# Comments


@inbox_bp.route("/comments", methods=["GET"])
@admin_required
def list_comments():
    return success_response([c.to_dict() for c in CommentRepository.get_all()])


@inbox_bp.route("/comments/<comment_id>", methods=["DELETE"])
@admin_required
def delete_comment(comment_id):
    delete_record(CommentRepository, "Comment", comment_id, confirmed=is_confirmed())
    return success_response(message="Comment deleted")
