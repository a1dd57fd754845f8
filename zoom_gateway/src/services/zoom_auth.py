"""Autenticación Server-to-Server OAuth de Zoom (account credentials).

Uso:
    auth = ZoomAccountCredentials()
    credential = auth.acquire()  # Credential con expires_at absoluto
"""

from __future__ import annotations

import os
from typing import Optional

import requests

from ..config import Config
from .client_credentials import ClientCredentials


class ZoomAccountCredentials(ClientCredentials):
    def __init__(
        self,
        account_id: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_url: Optional[str] = None,
        timeout: Optional[float] = None,
        **kwargs,
    ):
        self.account_id = account_id or Config.ZOOM_ACCOUNT_ID or os.getenv("ZOOM_ACCOUNT_ID")
        if not self.account_id:
            raise RuntimeError("Zoom account credentials require ZOOM_ACCOUNT_ID")
        client_id = client_id or Config.ZOOM_CLIENT_ID or os.getenv("ZOOM_CLIENT_ID")
        client_secret = client_secret or Config.ZOOM_CLIENT_SECRET or os.getenv("ZOOM_CLIENT_SECRET")
        super().__init__(
            client_id=client_id,
            client_secret=client_secret,
            token_url=token_url or Config.ZOOM_TOKEN_URL,
            timeout=timeout if timeout is not None else Config.ZOOM_TOKEN_TIMEOUT,
            **kwargs,
        )

    def _fetch_token(self):
        params = {"grant_type": "account_credentials", "account_id": self.account_id}
        resp = requests.post(
            self.token_url,
            params=params,
            auth=(self.client_id, self.client_secret),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError("token response is not a JSON object")
        return data.get("access_token"), int(data.get("expires_in", 3600)), data.get("scope")
