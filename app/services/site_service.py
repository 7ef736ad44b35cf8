"""Validation and persistence for the flat site records (ads, notices, FAQs, inbox)."""

import structlog
from sqlalchemy.exc import SQLAlchemyError

from constants import (
    AD_PLACEMENTS,
    AD_TYPES,
    AD_TYPE_IMAGE,
    NOTICE_PAGES,
    NOTICE_TYPES,
    TELEGRAM_TYPES,
)
from exceptions import ConfirmationRequiredException, DatabaseException, NotFoundException, ValidationException
from utils import blank_to_none, parse_bool

logger = structlog.get_logger('site')


def _required(data, key):
    value = data.get(key)
    if isinstance(value, str):
        value = value.strip()
    if not value:
        raise ValidationException(f"{key} is required")
    return value


def _one_of(value, allowed, name):
    if value not in allowed:
        raise ValidationException(f"Invalid {name} '{value}', expected one of {allowed}")
    return value


def ad_fields(data):
    """Image ads keep image and destination, script ads keep the script"""
    fields = {
        "title": _required(data, "title"),
        "placement": _one_of(data.get("placement"), AD_PLACEMENTS, "placement"),
        "ad_type": _one_of(data.get("ad_type"), AD_TYPES, "ad type"),
        "is_active": parse_bool(data.get("is_active"), default=True),
    }
    if fields["ad_type"] == AD_TYPE_IMAGE:
        fields["image_url"] = _required(data, "image_url")
        fields["destination_url"] = _required(data, "destination_url")
        fields["script_code"] = None
    else:
        fields["script_code"] = _required(data, "script_code")
        fields["image_url"] = None
        fields["destination_url"] = None
    return fields


def notice_fields(data):
    fields = {
        "content": _required(data, "content"),
        "type": _one_of(data.get("type") or NOTICE_TYPES[0], NOTICE_TYPES, "notice type"),
        "pages": _one_of(data.get("pages") or NOTICE_PAGES[0], NOTICE_PAGES, "notice pages"),
        "is_active": parse_bool(data.get("is_active"), default=True),
    }
    for key in ("bg_color", "text_color"):
        if data.get(key):
            fields[key] = data[key]
    return fields


def faq_fields(data):
    return {
        "question": _required(data, "question"),
        "answer": _required(data, "answer"),
        "keywords": _required(data, "keywords"),
        "is_active": parse_bool(data.get("is_active"), default=True),
    }


def chatbot_fields(data):
    fields = {}
    if "is_enabled" in data:
        fields["is_enabled"] = parse_bool(data.get("is_enabled"))
    for key in ("bot_name", "welcome_message", "placeholder_text"):
        if key in data:
            fields[key] = blank_to_none(data.get(key))
    return fields


def status_value(data, allowed):
    return _one_of(data.get("status"), allowed, "status")


def app_settings_fields(data):
    fields = {}
    if "is_ads_enabled" in data:
        fields["is_ads_enabled"] = parse_bool(data.get("is_ads_enabled"))
    for key in ("popunder_url", "direct_link_url"):
        if key in data:
            fields[key] = blank_to_none(data.get(key))
    return fields


def telegram_fields(data):
    fields = {}
    if "telegram_type" in data:
        fields["telegram_type"] = _one_of(data.get("telegram_type"), TELEGRAM_TYPES, "telegram type")
    if "telegram_url" in data:
        fields["telegram_url"] = blank_to_none(data.get("telegram_url"))
    if "is_active" in data:
        fields["is_active"] = parse_bool(data.get("is_active"))
    return fields


# Persistence helpers shared by the flat-record routes


def get_record(repository, resource_type, item_id):
    item = repository.get_by_id(item_id)
    if item is None:
        raise NotFoundException(resource_type, item_id)
    return item


def save_record(repository, resource_type, fields, item_id=None):
    """Create when `item_id` is None, otherwise update in place"""
    try:
        if item_id is None:
            item = repository.create(**fields)
        else:
            item = repository.update(item_id, **fields)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error saving {resource_type.lower()}: {e}")
    if item is None:
        raise NotFoundException(resource_type, item_id)
    logger.info(f"{resource_type} saved", id=item.id)
    return item


def delete_record(repository, resource_type, item_id, confirmed=False):
    if not confirmed:
        raise ConfirmationRequiredException(f"Delete this {resource_type.lower()}? Resend with confirm=true.")
    try:
        deleted = repository.delete(item_id)
    except SQLAlchemyError as e:
        raise DatabaseException(f"Error deleting {resource_type.lower()} {item_id}: {e}")
    if not deleted:
        raise NotFoundException(resource_type, item_id)
    logger.info(f"{resource_type} deleted", id=item_id)
