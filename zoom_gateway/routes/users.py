"""Endpoints de usuarios de Zoom.

Cada handler es un pass-through directo: mismos parámetros, mismo JSON de vuelta.
"""

import requests
from flask import Blueprint, g, jsonify, request

from ..src.authorization import authorize_upstream
from ..src.errors import relay_error
from ..src.utils import current_zoom, query_params


bp = Blueprint("users", __name__)
bp.before_request(authorize_upstream)


@bp.get("")
def list_users():
    """https://marketplace.zoom.us/docs/api-reference/zoom-api/methods/#operation/users"""
    try:
        data = current_zoom().request(
            "GET", "/users", g.upstream_headers, params=query_params("status", "next_page_token")
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, "Error fetching users")


@bp.post("/add")
def create_user():
    """https://marketplace.zoom.us/docs/api-reference/zoom-api/methods/#operation/userCreate"""
    try:
        data = current_zoom().request("POST", "/users", g.upstream_headers, json=request.get_json(silent=True))
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, "Error creating user")


@bp.get("/<user_id>")
def get_user(user_id: str):
    try:
        data = current_zoom().request("GET", f"/users/{user_id}", g.upstream_headers, params=query_params("status"))
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching user: {user_id}")


@bp.get("/<user_id>/settings")
def get_user_settings(user_id: str):
    try:
        data = current_zoom().request("GET", f"/users/{user_id}/settings", g.upstream_headers)
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching settings for user: {user_id}")


@bp.patch("/<user_id>/settings")
def update_user_settings(user_id: str):
    try:
        data = current_zoom().request(
            "PATCH", f"/users/{user_id}/settings", g.upstream_headers, json=request.get_json(silent=True)
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error updating settings for user: {user_id}")


@bp.patch("/<user_id>")
def update_user(user_id: str):
    try:
        data = current_zoom().request(
            "PATCH", f"/users/{user_id}", g.upstream_headers, json=request.get_json(silent=True)
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error updating user: {user_id}")


@bp.delete("/<user_id>")
def delete_user(user_id: str):
    """`action` puede ser disassociate (default en Zoom) o delete."""
    try:
        data = current_zoom().request(
            "DELETE", f"/users/{user_id}", g.upstream_headers, params=query_params("action")
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error deleting user: {user_id}")


@bp.get("/<user_id>/meetings")
def list_user_meetings(user_id: str):
    try:
        data = current_zoom().request(
            "GET", f"/users/{user_id}/meetings", g.upstream_headers, params=query_params("next_page_token")
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching meetings for user: {user_id}")


@bp.get("/<user_id>/webinars")
def list_user_webinars(user_id: str):
    try:
        data = current_zoom().request(
            "GET", f"/users/{user_id}/webinars", g.upstream_headers, params=query_params("next_page_token")
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching webinars for user: {user_id}")


@bp.get("/<user_id>/recordings")
def list_user_recordings(user_id: str):
    """Grabaciones en la nube; `from`/`to` en formato yyyy-mm-dd."""
    try:
        data = current_zoom().request(
            "GET",
            f"/users/{user_id}/recordings",
            g.upstream_headers,
            params=query_params("from", "to", "next_page_token"),
        )
        return jsonify(data), 200
    except requests.RequestException as exc:
        return relay_error(exc, f"Error fetching recordings for user: {user_id}")
