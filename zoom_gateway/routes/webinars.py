"""Endpoints de webinars de Zoom (incluye registrants y reportes de participantes)."""

import requests
from flask import Blueprint, g, jsonify, request

from ..src.authorization import authorize_upstream
from ..src.errors import relay_error
from ..src.utils import current_zoom, query_params


bp = Blueprint("webinars", __name__)
bp.before_request(authorize_upstream)


@bp.get("/<webinar_id>")
def get_webinar(webinar_id: str):
    try:
        data = current_zoom().request("GET", f"/webinars/{webinar_id}", g.upstream_headers)
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching webinar: {webinar_id}")


@bp.post("/<user_id>")
def create_webinar(user_id: str):
    try:
        data = current_zoom().request(
            "POST", f"/users/{user_id}/webinars", g.upstream_headers, json=request.get_json(silent=True)
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error creating webinar for user: {user_id}")


@bp.delete("/<webinar_id>")
def delete_webinar(webinar_id: str):
    try:
        data = current_zoom().request("DELETE", f"/webinars/{webinar_id}", g.upstream_headers)
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error deleting webinar: {webinar_id}")


@bp.patch("/<webinar_id>")
def update_webinar(webinar_id: str):
    try:
        data = current_zoom().request(
            "PATCH", f"/webinars/{webinar_id}", g.upstream_headers, json=request.get_json(silent=True)
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error updating webinar: {webinar_id}")


@bp.get("/<webinar_id>/registrants")
def list_registrants(webinar_id: str):
    try:
        data = current_zoom().request(
            "GET",
            f"/webinars/{webinar_id}/registrants",
            g.upstream_headers,
            params=query_params("status", "next_page_token"),
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching registrants for webinar: {webinar_id}")


@bp.put("/<webinar_id>/registrants/status")
def update_registrant_status(webinar_id: str):
    """Body: { action: approve|cancel|deny, registrants: [{ id, email }] }"""
    try:
        data = current_zoom().request(
            "PUT",
            f"/webinars/{webinar_id}/registrants/status",
            g.upstream_headers,
            json=request.get_json(silent=True),
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, "Error updating webinar registrant status")


@bp.get("/<webinar_id>/report/participants")
def webinar_participants_report(webinar_id: str):
    try:
        data = current_zoom().request(
            "GET",
            f"/report/webinars/{webinar_id}/participants",
            g.upstream_headers,
            params=query_params("next_page_token"),
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching webinar participants for webinar: {webinar_id}")


@bp.post("/<webinar_id>/registrants")
def add_registrant(webinar_id: str):
    try:
        data = current_zoom().request(
            "POST", f"/webinars/{webinar_id}/registrants", g.upstream_headers, json=request.get_json(silent=True)
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error creating registrant for webinar: {webinar_id}")
