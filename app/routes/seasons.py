"""
Season Routes - seasons and episodes of series and anime
"""

from flask import Blueprint, request

from api_responses import success_response
from middleware.auth import admin_required
from middleware.confirm import is_confirmed
from services import season_service

seasons_bp = Blueprint("seasons", __name__, url_prefix="/api")


@seasons_bp.route("/content/<content_id>/seasons", methods=["GET"])
@admin_required
def list_seasons(content_id):
    seasons = season_service.list_seasons(content_id)
    return success_response([s.to_dict(with_episodes=True) for s in seasons])


@seasons_bp.route("/content/<content_id>/seasons", methods=["POST"])
@admin_required
def create_season(content_id):
    season = season_service.save_season(content_id, request.get_json(silent=True) or {})
    return success_response(season.to_dict(), status_code=201)


@seasons_bp.route("/content/<content_id>/seasons/<season_id>", methods=["PUT"])
@admin_required
def update_season(content_id, season_id):
    season = season_service.save_season(content_id, request.get_json(silent=True) or {}, season_id=season_id)
    return success_response(season.to_dict())


@seasons_bp.route("/seasons/<season_id>", methods=["DELETE"])
@admin_required
def delete_season(season_id):
    season_service.delete_season(season_id, confirmed=is_confirmed())
    return success_response(message="Season deleted")


@seasons_bp.route("/seasons/<season_id>/episodes", methods=["POST"])
@admin_required
def create_episode(season_id):
    episode = season_service.save_episode(season_id, request.get_json(silent=True) or {})
    return success_response(episode.to_dict(with_links=True), status_code=201)


@seasons_bp.route("/seasons/<season_id>/episodes/<episode_id>", methods=["PUT"])
@admin_required
def update_episode(season_id, episode_id):
    episode = season_service.save_episode(season_id, request.get_json(silent=True) or {}, episode_id=episode_id)
    return success_response(episode.to_dict(with_links=True))


@seasons_bp.route("/episodes/<episode_id>", methods=["DELETE"])
@admin_required
def delete_episode(episode_id):
    season_service.delete_episode(episode_id, confirmed=is_confirmed())
    return success_response(message="Episode deleted")
