"""Cliente del API REST de Zoom (v2) usado por las rutas del gateway.

No maneja autenticación: recibe los headers que dejó el middleware en `g`.
"""

from typing import Any, Dict, Optional

import requests

from ..config import Config


class ZoomService:
    def __init__(self, api_base: str | None = None, timeout: float | None = None):
        self.api_base = (api_base or Config.ZOOM_API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.ZOOM_API_TIMEOUT

    def request(
        self,
        method: str,
        path: str,
        headers: Dict[str, str],
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """Llamada directa a Zoom; levanta requests.HTTPError en no-2xx."""
        r = requests.request(
            method,
            f"{self.api_base}/{path.lstrip('/')}",
            headers=headers,
            params=params,
            json=json,
            timeout=self.timeout,
        )
        r.raise_for_status()
        # DELETE/PATCH devuelven 204 sin cuerpo
        if r.status_code == 204 or not r.content:
            return {}
        return r.json()
