"""
Dead Link Routes - expired provider links and manual reactivation
"""

from flask import Blueprint, request

from api_responses import success_response
from constants import LINK_KIND_MOVIES
from middleware.auth import admin_required
from middleware.confirm import is_confirmed
from services.dead_links import DeadLinkService

dead_links_bp = Blueprint("dead_links", __name__, url_prefix="/api")


@dead_links_bp.route("/dead-links", methods=["GET"])
@admin_required
def list_dead_links():
    kind = request.args.get("kind", LINK_KIND_MOVIES)
    dead = DeadLinkService().list_dead_links(kind)
    return success_response({"kind": kind, "total": len(dead), "items": [d.to_dict() for d in dead]})


@dead_links_bp.route("/dead-links/<kind>/<row_id>/mark-active", methods=["POST"])
@admin_required
def mark_active(kind, row_id):
    data = request.get_json(silent=True) or {}
    new_status = DeadLinkService().mark_active(
        kind,
        row_id,
        data.get("provider_key"),
        current_status=data.get("current_status"),
        confirmed=is_confirmed(),
    )
    return success_response({"id": row_id, "link_status": new_status}, message="Link marked active")
