"""
Platform Routes - site-wide switches and admin settings
"""

from flask import Blueprint, current_app, request
from sqlalchemy.exc import SQLAlchemyError
import logging

from api_responses import success_response, error_response, ErrorCode
from exceptions import DatabaseException
from middleware.auth import admin_required
from repositories.site_repository import AppSettingsRepository, TelegramSettingsRepository
from services.site_service import app_settings_fields, telegram_fields
from settings import load_settings, reload_conf, set_storage_settings
from storage import build_object_store
from utils import now_utc, sanitize_sensitive_data

logger = logging.getLogger("main")

platform_bp = Blueprint("platform", __name__, url_prefix="/api")


def _platform_settings():
    return {
        "app": AppSettingsRepository.get().to_dict(),
        "telegram": TelegramSettingsRepository.get().to_dict(),
    }


@platform_bp.route("/platform-settings", methods=["GET"])
@admin_required
def get_platform_settings():
    return success_response(_platform_settings())


@platform_bp.route("/platform-settings", methods=["PUT"])
@admin_required
def update_platform_settings():
    data = request.get_json(silent=True) or {}
    app_fields = app_settings_fields(data.get("app") or {})
    tg_fields = telegram_fields(data.get("telegram") or {})

    try:
        AppSettingsRepository.update(updated_at=now_utc(), **app_fields)
        TelegramSettingsRepository.update(updated_at=now_utc(), **tg_fields)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error saving platform settings: {e}")

    logger.info("Platform settings updated")
    return success_response(_platform_settings(), message="Settings saved")


@platform_bp.route("/settings", methods=["GET"])
@admin_required
def get_settings_api():
    """Current YAML settings with secrets masked"""
    reload_conf()
    return success_response(sanitize_sensitive_data(load_settings()))


@platform_bp.route("/settings/storage", methods=["POST"])
@admin_required
def set_storage_settings_api():
    data = request.get_json(silent=True) or {}
    success, errors = set_storage_settings(data)
    if not success:
        return error_response(ErrorCode.VALIDATION_ERROR, details=errors, status_code=400)

    # Services read the store from the app, so swap it for the new backend
    current_app.extensions["object_store"] = build_object_store(load_settings()["storage"])
    logger.info(f"Storage backend set to {load_settings()['storage']['backend']}")
    return success_response(message="Storage settings saved")
