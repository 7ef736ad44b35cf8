"""
Notice Routes - top bars and popups
"""

from flask import Blueprint, request
from sqlalchemy.exc import SQLAlchemyError

from api_responses import success_response
from exceptions import DatabaseException, NotFoundException
from middleware.auth import admin_required
from middleware.confirm import is_confirmed
from repositories.site_repository import NoticeRepository
from services.site_service import delete_record, get_record, notice_fields, save_record

notices_bp = Blueprint("notices", __name__, url_prefix="/api/notices")


@notices_bp.route("", methods=["GET"])
@admin_required
def list_notices():
    return success_response([n.to_dict() for n in NoticeRepository.get_all()])


@notices_bp.route("/<notice_id>", methods=["GET"])
@admin_required
def get_notice(notice_id):
    return success_response(get_record(NoticeRepository, "Notice", notice_id).to_dict())


@notices_bp.route("", methods=["POST"])
@admin_required
def create_notice():
    notice = save_record(NoticeRepository, "Notice", notice_fields(request.get_json(silent=True) or {}))
    return success_response(notice.to_dict(), status_code=201)


@notices_bp.route("/<notice_id>", methods=["PUT"])
@admin_required
def update_notice(notice_id):
    fields = notice_fields(request.get_json(silent=True) or {})
    notice = save_record(NoticeRepository, "Notice", fields, item_id=notice_id)
    return success_response(notice.to_dict())


@notices_bp.route("/<notice_id>/toggle", methods=["POST"])
@admin_required
def toggle_notice(notice_id):
    try:
        notice = NoticeRepository.toggle_active(notice_id)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error toggling notice {notice_id}: {e}")
    if notice is None:
        raise NotFoundException("Notice", notice_id)
    return success_response(notice.to_dict())


@notices_bp.route("/<notice_id>", methods=["DELETE"])
@admin_required
def delete_notice(notice_id):
    delete_record(NoticeRepository, "Notice", notice_id, confirmed=is_confirmed())
    return success_response(message="Notice deleted")
