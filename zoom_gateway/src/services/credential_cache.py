"""Cache del token de Zoom sobre el store compartido.

Toda lectura del token activo pasa por aquí: se sirve lo que hay en el store si
sigue vigente (con margen) y si no, se adquiere uno nuevo con una sola llamada
al proveedor aunque haya muchos requests concurrentes.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional

from ..errors import AcquisitionError, ProviderError, StoreError
from ..utils import SingleFlight
from .client_credentials import ClientCredentials, Credential
from .credential_store import CredentialStore

logger = logging.getLogger(__name__)


class CredentialCache:
    def __init__(
        self,
        store: CredentialStore,
        provider: ClientCredentials,
        key: str = "access_token",
        refresh_margin: float = 60,
        wait_timeout: Optional[float] = 30,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.provider = provider
        self.key = key
        self.refresh_margin = refresh_margin
        self.wait_timeout = wait_timeout
        self.clock = clock
        self._flight = SingleFlight()
        self._write_lock = threading.Lock()
        self._closed = False

    def get_valid_credential(self) -> Credential:
        """Return a credential valid beyond the refresh margin or raise AcquisitionError."""
        credential = self._read_cached()
        if credential is not None:
            return credential
        try:
            return self._flight.do(self.key, self._acquire, timeout=self.wait_timeout)
        except ProviderError as exc:
            raise AcquisitionError(str(exc)) from exc
        except FutureTimeoutError as exc:
            raise AcquisitionError(
                f"Timed out after {self.wait_timeout}s waiting for in-flight token acquisition"
            ) from exc

    def in_flight(self) -> int:
        """Callers currently sharing the running acquisition (0 when idle)."""
        return self._flight.in_flight(self.key)

    def close(self) -> None:
        """Stop writing to the store; later acquisitions are still served, uncached."""
        with self._write_lock:
            self._closed = True

    def _read_cached(self) -> Optional[Credential]:
        try:
            raw = self.store.get(self.key)
        except StoreError as exc:
            logger.warning("Credential store read failed, acquiring a new token: %s", exc)
            return None
        if raw is None:
            return None
        credential = Credential.loads(raw)
        if credential is None:
            logger.warning("Discarding unreadable cached credential under %s", self.key)
            return None
        if not credential.is_valid(self.clock(), self.refresh_margin):
            logger.debug("Cached credential expired or within %ss of expiry", self.refresh_margin)
            return None
        logger.debug("Credential cache hit (%ds left)", int(credential.expires_at - self.clock()))
        return credential

    def _acquire(self) -> Credential:
        # otro proceso puede haber renovado el key mientras esperábamos
        credential = self._read_cached()
        if credential is not None:
            return credential

        started = time.monotonic()
        try:
            credential = self.provider.acquire()
        except ProviderError as exc:
            logger.error(
                "Token acquisition failed after %d ms: %s",
                int((time.monotonic() - started) * 1000),
                exc,
            )
            raise
        logger.info("Token acquired in %d ms", int((time.monotonic() - started) * 1000))

        now = self.clock()
        if not credential.is_valid(now, self.refresh_margin):
            logger.warning(
                "Token lifetime %ds is within the %ss refresh margin; every request will acquire a new one",
                int(credential.expires_at - now),
                self.refresh_margin,
            )
        ttl = credential.ttl(now, self.refresh_margin)
        # el lock asegura que ninguna escritura llegue después de close()
        with self._write_lock:
            if self._closed:
                logger.info("Shutting down, not caching acquired credential %s", self.key)
                return credential
            try:
                self.store.set(self.key, credential.dumps(), ttl)
            except StoreError as exc:
                logger.warning("Could not cache acquired credential, serving it uncached: %s", exc)
            else:
                logger.info("Cached credential %s with ttl=%ds", self.key, ttl)
        return credential
