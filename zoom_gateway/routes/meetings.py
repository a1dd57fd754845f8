import requests
from flask import Blueprint, g, jsonify, request

from ..src.authorization import authorize_upstream
from ..src.errors import relay_error
from ..src.utils import current_zoom, query_params


bp = Blueprint("meetings", __name__)
bp.before_request(authorize_upstream)


@bp.get("/<meeting_id>")
def get_meeting(meeting_id: str):
    try:
        data = current_zoom().request("GET", f"/meetings/{meeting_id}", g.upstream_headers)
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching meeting: {meeting_id}")


@bp.post("/<user_id>")
def create_meeting(user_id: str):
    try:
        data = current_zoom().request(
            "POST", f"/users/{user_id}/meetings", g.upstream_headers, json=request.get_json(silent=True)
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error creating meeting for user: {user_id}")


@bp.patch("/<meeting_id>")
def update_meeting(meeting_id: str):
    try:
        data = current_zoom().request(
            "PATCH", f"/meetings/{meeting_id}", g.upstream_headers, json=request.get_json(silent=True)
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error updating meeting: {meeting_id}")


@bp.delete("/<meeting_id>")
def delete_meeting(meeting_id: str):
    try:
        data = current_zoom().request("DELETE", f"/meetings/{meeting_id}", g.upstream_headers)
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error deleting meeting: {meeting_id}")


@bp.get("/<meeting_id>/report/participants")
def meeting_participants_report(meeting_id: str):
    try:
        data = current_zoom().request(
            "GET",
            f"/report/meetings/{meeting_id}/participants",
            g.upstream_headers,
            params=query_params("next_page_token"),
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching participants for meeting: {meeting_id}")


@bp.delete("/<meeting_id>/recordings")
def delete_meeting_recordings(meeting_id: str):
    try:
        data = current_zoom().request(
            "DELETE", f"/meetings/{meeting_id}/recordings", g.upstream_headers, params=query_params("action")
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error deleting recordings for meeting: {meeting_id}")
