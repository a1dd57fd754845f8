"""Base helper for OAuth client credentials token acquisition."""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, Optional, Tuple

import requests

from ..errors import ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credential:
    access_token: str = field(repr=False)
    expires_at: float
    token_type: str = "bearer"
    scope: Optional[str] = None

    def is_valid(self, now: float, margin: float = 0) -> bool:
        return bool(self.access_token) and self.expires_at - margin > now

    def ttl(self, now: float, margin: float = 0) -> int:
        """Seconds the store may keep this credential; never below 1."""
        return max(1, int(self.expires_at - margin - now))

    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def dumps(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def loads(cls, raw: str) -> Optional["Credential"]:
        """Parse a stored entry; anything unreadable counts as no entry."""
        try:
            data = json.loads(raw)
            return cls(
                access_token=data["access_token"],
                expires_at=float(data["expires_at"]),
                token_type=data.get("token_type") or "bearer",
                scope=data.get("scope"),
            )
        except (TypeError, ValueError, KeyError):
            return None


class ClientCredentials(ABC):
    def __init__(
        self,
        client_id: str,
        client_secret: str,
        token_url: str,
        scope: Optional[str] = None,
        timeout: float = 10,
        clock: Callable[[], float] = time.time,
    ):
        if not client_id or not client_secret:
            raise RuntimeError("Client credentials require client_id and client_secret")
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.scope = scope
        self.timeout = timeout
        self.clock = clock

    def __repr__(self) -> str:
        return f"{type(self).__name__}(client_id={self.client_id!r}, token_url={self.token_url!r})"

    def acquire(self) -> Credential:
        """Run one token exchange. Never retries; failures raise ProviderError."""
        issued_at = self.clock()
        try:
            value, expires_in, scope = self._fetch_token()
        except requests.Timeout as exc:
            raise ProviderError(f"Token request to {self.token_url} timed out after {self.timeout}s") from exc
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            raise ProviderError(f"Token request to {self.token_url} failed with status {status}") from exc
        except requests.RequestException as exc:
            raise ProviderError(f"Token request to {self.token_url} failed: {type(exc).__name__}") from exc
        except (ValueError, TypeError) as exc:
            raise ProviderError(f"Unparsable token response from {self.token_url}") from exc
        if not value:
            raise ProviderError("Client credentials response did not return an access token")
        if expires_in <= 0:
            raise ProviderError(f"Client credentials response returned a non-positive lifetime: {expires_in}")
        logger.info("Acquired access token from %s, expires_in=%ds", self.token_url, expires_in)
        return Credential(access_token=value, expires_at=issued_at + expires_in, scope=scope)

    @abstractmethod
    def _fetch_token(self) -> Tuple[Optional[str], int, Optional[str]]:
        """Return a tuple (access_token, expires_in, scope)."""
