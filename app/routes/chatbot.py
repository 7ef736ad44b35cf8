"""
Chatbot Routes - bot settings and FAQ answers
"""

from flask import Blueprint, request
from sqlalchemy.exc import SQLAlchemyError

from api_responses import success_response
from exceptions import DatabaseException
from middleware.auth import admin_required
from middleware.confirm import is_confirmed
from repositories.site_repository import ChatbotSettingsRepository, FAQRepository
from services.site_service import chatbot_fields, delete_record, faq_fields, save_record

chatbot_bp = Blueprint("chatbot", __name__, url_prefix="/api/chatbot")


@chatbot_bp.route("/settings", methods=["GET"])
@admin_required
def get_chatbot_settings():
    return success_response(ChatbotSettingsRepository.get().to_dict())


@chatbot_bp.route("/settings", methods=["PUT"])
@admin_required
def update_chatbot_settings():
    try:
        settings = ChatbotSettingsRepository.update(**chatbot_fields(request.get_json(silent=True) or {}))
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error saving chatbot settings: {e}")
    return success_response(settings.to_dict(), message="Chatbot settings saved")


@chatbot_bp.route("/faqs", methods=["GET"])
@admin_required
def list_faqs():
    return success_response([f.to_dict() for f in FAQRepository.get_all()])


@chatbot_bp.route("/faqs", methods=["POST"])
@admin_required
def create_faq():
    faq = save_record(FAQRepository, "FAQ", faq_fields(request.get_json(silent=True) or {}))
    return success_response(faq.to_dict(), status_code=201)


@chatbot_bp.route("/faqs/<faq_id>", methods=["DELETE"])
@admin_required
def delete_faq(faq_id):
    delete_record(FAQRepository, "FAQ", faq_id, confirmed=is_confirmed())
    return success_response(message="FAQ deleted")
