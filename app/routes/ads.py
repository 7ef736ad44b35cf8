"""
Ad Routes - ad slots shown on the public site
"""

from flask import Blueprint, request

from api_responses import success_response
from middleware.auth import admin_required
from middleware.confirm import is_confirmed
from repositories.site_repository import AdRepository
from services.site_service import ad_fields, delete_record, get_record, save_record

ads_bp = Blueprint("ads", __name__, url_prefix="/api/ads")


@ads_bp.route("", methods=["GET"])
@admin_required
def list_ads():
    return success_response([a.to_dict() for a in AdRepository.get_all()])


@ads_bp.route("/<ad_id>", methods=["GET"])
@admin_required
def get_ad(ad_id):
    return success_response(get_record(AdRepository, "Ad", ad_id).to_dict())


@ads_bp.route("", methods=["POST"])
@admin_required
def create_ad():
    ad = save_record(AdRepository, "Ad", ad_fields(request.get_json(silent=True) or {}))
    return success_response(ad.to_dict(), status_code=201)


@ads_bp.route("/<ad_id>", methods=["PUT"])
@admin_required
def update_ad(ad_id):
    ad = save_record(AdRepository, "Ad", ad_fields(request.get_json(silent=True) or {}), item_id=ad_id)
    return success_response(ad.to_dict())


@ads_bp.route("/<ad_id>", methods=["DELETE"])
@admin_required
def delete_ad(ad_id):
    delete_record(AdRepository, "Ad", ad_id, confirmed=is_confirmed())
    return success_response(message="Ad deleted")
