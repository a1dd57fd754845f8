from flask import Flask, jsonify, request, g
import time
import logging
from typing import Any, Dict, Optional

from flask_cors import CORS

from .src.config import Config
from .src.lifecycle import ActiveRequests
from .src.services.client_credentials import ClientCredentials
from .src.services.credential_cache import CredentialCache
from .src.services.credential_store import CredentialStore, RedisCredentialStore
from .src.services.zoom_auth import ZoomAccountCredentials
from .src.services.zoom_service import ZoomService
from .routes.health import bp as health_bp
from .routes.users import bp as users_bp
from .routes.meetings import bp as meetings_bp
from .routes.webinars import bp as webinars_bp


def create_app(
    config: Optional[Dict[str, Any]] = None,
    store: Optional[CredentialStore] = None,
    provider: Optional[ClientCredentials] = None,
    zoom: Optional[ZoomService] = None,
):
    app = Flask(__name__)
    app.config.from_object(Config)
    if config:
        app.config.update(config)

    CORS(app, resources={r"/*": {"origins": app.config["CORS_ORIGINS"]}})

    if store is None:
        store = RedisCredentialStore.from_url(app.config["REDIS_URL"], app.config["REDIS_SOCKET_TIMEOUT"])
    if provider is None:
        provider = ZoomAccountCredentials(
            account_id=app.config["ZOOM_ACCOUNT_ID"],
            client_id=app.config["ZOOM_CLIENT_ID"],
            client_secret=app.config["ZOOM_CLIENT_SECRET"],
            token_url=app.config["ZOOM_TOKEN_URL"],
            timeout=app.config["ZOOM_TOKEN_TIMEOUT"],
        )
    # cuenta los requests en curso para drenarlos al apagar
    app.wsgi_app = ActiveRequests(app.wsgi_app)
    app.extensions["active_requests"] = app.wsgi_app
    app.extensions["credential_store"] = store
    app.extensions["credential_cache"] = CredentialCache(
        store,
        provider,
        key=app.config["CREDENTIAL_KEY"],
        refresh_margin=app.config["CREDENTIAL_REFRESH_MARGIN"],
        wait_timeout=app.config["CREDENTIAL_WAIT_TIMEOUT"],
    )
    app.extensions["zoom_service"] = zoom or ZoomService(
        api_base=app.config["ZOOM_API_BASE_URL"],
        timeout=app.config["ZOOM_API_TIMEOUT"],
    )

    app.register_blueprint(health_bp)
    app.register_blueprint(users_bp, url_prefix="/api/users")
    app.register_blueprint(meetings_bp, url_prefix="/api/meetings")
    app.register_blueprint(webinars_bp, url_prefix="/api/webinars")

    # Log de todas las peticiones entrantes
    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @app.before_request
    def _log_start():
        g._start_time = time.time()

    @app.after_request
    def _log_request(resp):
        started = getattr(g, '_start_time', None)
        dur_ms = int((time.time() - started) * 1000) if started else -1
        logging.info(
            "%s %s -> %s (%d ms) ip=%s",
            request.method,
            request.path,
            resp.status_code,
            dur_ms,
            request.headers.get('X-Forwarded-For', request.remote_addr),
        )
        return resp

    @app.get("/")
    def root():
        return jsonify({"name": "zoom_gateway", "status": "ok"}), 200

    return app
