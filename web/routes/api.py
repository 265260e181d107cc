"""JSON API routes exposing the suggestion engine."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from tools.generate_suggestions import generate_batch, generate_channel_suggestions
from tools.video_rules import evaluate_video
from web.services.serializers import batch_result_to_dict, channel_result_to_dict, suggestion_to_dict
from web.services.suggestion_runner import (
    PayloadTooLarge,
    parse_batch_payload,
    parse_channel_payload,
    parse_video_payload,
)

api_bp = Blueprint("api", __name__)



def _bad_request(exc: ValueError):
    status = 413 if isinstance(exc, PayloadTooLarge) else 400
    current_app.logger.warning("Rejected %s payload: %s", request.path, exc)
    return jsonify({"error": str(exc)}), status


@api_bp.get("/api/health")
def health():
    return jsonify({"status": "ok", "env": current_app.config.get("APP_ENV", "development")})


@api_bp.post("/api/suggestions/video")
def video_suggestions():
    payload = request.get_json(silent=True)
    try:
        video, averages = parse_video_payload(payload)
    except ValueError as exc:
        return _bad_request(exc)

    suggestions = evaluate_video(video, averages)
    return jsonify({"items": [suggestion_to_dict(s) for s in suggestions], "count": len(suggestions)})


@api_bp.post("/api/suggestions/channel")
def channel_suggestions():
    payload = request.get_json(silent=True)
    try:
        channel_id, videos = parse_channel_payload(payload, current_app.config.get("MAX_VIDEOS", 0))
    except ValueError as exc:
        return _bad_request(exc)

    result = generate_channel_suggestions(videos, channel_id=channel_id)
    return jsonify(channel_result_to_dict(result))


@api_bp.post("/api/suggestions/generate")
def generate_suggestions():
    payload = request.get_json(silent=True)
    try:
        channels = parse_batch_payload(payload, current_app.config.get("MAX_VIDEOS", 0))
    except ValueError as exc:
        return _bad_request(exc)

    result = generate_batch(channels)
    if not result.channels:
        return jsonify({"error": "No channel has any videos"}), 404
    return jsonify(batch_result_to_dict(result))
