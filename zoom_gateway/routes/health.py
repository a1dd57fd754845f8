from flask import Blueprint, current_app, jsonify


bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    # No toca el cache: un health check nunca dispara adquisición de token
    store_ok = current_app.extensions["credential_store"].ping()
    return jsonify({
        "status": "ok" if store_ok else "degraded",
        "service": "zoom_gateway",
        "credential_store": "ok" if store_ok else "unreachable",
        "debug": current_app.config.get("DEBUG", False),
    }), 200 if store_ok else 503
