"""Apagado ordenado del gateway.

SIGTERM/SIGINT -> dejar de aceptar conexiones -> esperar los requests en curso ->
cortar escrituras del cache -> borrar el token cacheado -> cerrar el servidor ->
cerrar la conexión a Redis -> salir.
"""

from __future__ import annotations

import logging
import signal
import threading
from typing import Optional

from .errors import StoreError
from .services.credential_cache import CredentialCache

logger = logging.getLogger(__name__)


class ActiveRequests:
    """Middleware WSGI que cuenta los requests en curso para poder drenarlos."""

    def __init__(self, wsgi_app):
        self.wsgi_app = wsgi_app
        self._count = 0
        self._idle = threading.Condition()

    def __call__(self, environ, start_response):
        with self._idle:
            self._count += 1
        try:
            return self.wsgi_app(environ, start_response)
        finally:
            with self._idle:
                self._count -= 1
                if self._count == 0:
                    self._idle.notify_all()

    @property
    def count(self) -> int:
        with self._idle:
            return self._count

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """True if every request finished before the timeout."""
        with self._idle:
            return self._idle.wait_for(lambda: self._count == 0, timeout)


class LifecycleManager:
    def __init__(
        self,
        server,
        cache: CredentialCache,
        active: Optional[ActiveRequests] = None,
        drain_timeout: float = 30,
    ):
        self.server = server
        self.cache = cache
        self.store = cache.store
        self.credential_key = cache.key
        self.active = active
        self.drain_timeout = drain_timeout
        self._cleaned = False
        self._lock = threading.Lock()

    def install_signal_handlers(self) -> None:
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received %s, shutting down", signal.Signals(signum).name)
        self.request_shutdown()

    def request_shutdown(self) -> None:
        # server.shutdown() bloquea hasta que serve_forever termina; no puede
        # correr en el mismo hilo que lo está sirviendo
        threading.Thread(target=self.server.shutdown, name="gateway-shutdown", daemon=True).start()

    def run(self) -> None:
        """Serve until a shutdown is requested, then clean up on every exit path."""
        logger.info("Listening on %s:%s", *self.server.server_address[:2])
        try:
            self.server.serve_forever()
        finally:
            self.cleanup()

    def cleanup(self) -> None:
        with self._lock:
            if self._cleaned:
                return
            self._cleaned = True

        if self.active is not None:
            logger.info("Waiting up to %ss for %d in-flight requests", self.drain_timeout, self.active.count)
            if not self.active.wait_idle(self.drain_timeout):
                logger.warning("%d requests still running after %ss", self.active.count, self.drain_timeout)

        # desde aquí ningún request rezagado puede volver a escribir el key
        self.cache.close()
        try:
            self.store.delete(self.credential_key)
            logger.info("Removed cached credential %s", self.credential_key)
        except StoreError as exc:
            logger.error("Could not remove cached credential %s: %s", self.credential_key, exc)

        try:
            self.server.server_close()
            logger.info("HTTP server closed")
        except OSError as exc:
            logger.error("Error closing HTTP server: %s", exc)

        try:
            self.store.close()
        except StoreError as exc:
            logger.error("Error closing credential store: %s", exc)
