"""Punto de entrada: `zoom-gateway` o `python -m zoom_gateway`."""

import logging

from werkzeug.serving import make_server

from . import create_app
from .src.config import Config
from .src.lifecycle import LifecycleManager
from .src.services.credential_store import RedisCredentialStore

logger = logging.getLogger(__name__)


def main() -> None:
    store = RedisCredentialStore.from_url(Config.REDIS_URL, Config.REDIS_SOCKET_TIMEOUT)
    try:
        app = create_app(store=store)
        server = make_server(Config.HOST, Config.PORT, app, threaded=True)
    except BaseException:
        # el listener nunca llegó a levantarse; igual se libera Redis
        store.close()
        raise

    lifecycle = LifecycleManager(
        server,
        app.extensions["credential_cache"],
        active=app.extensions["active_requests"],
        drain_timeout=Config.SHUTDOWN_DRAIN_TIMEOUT,
    )
    lifecycle.install_signal_handlers()
    lifecycle.run()
    logger.info("Gateway stopped")


if __name__ == "__main__":
    main()
