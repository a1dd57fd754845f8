import logging

from flask import current_app, g, request

from .errors import AcquisitionError, authorization_unavailable

logger = logging.getLogger(__name__)


def authorize_upstream():
    """before_request de los blueprints del API: adjunta los headers con el Bearer de Zoom.

    Si no hay token posible corta el request con 503 y el handler no se ejecuta.
    """
    if request.method == "OPTIONS":
        return None
    cache = current_app.extensions["credential_cache"]
    try:
        credential = cache.get_valid_credential()
    except AcquisitionError as exc:
        logger.warning("Upstream authorization unavailable for %s %s: %s", request.method, request.path, exc)
        return authorization_unavailable()
    g.upstream_headers = credential.headers()
    return None
