"""Errores del gateway y relay de errores del API de Zoom hacia el cliente."""

from __future__ import annotations

from typing import Optional

import requests
from flask import jsonify


class GatewayError(Exception):
    code = "gateway_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ProviderError(GatewayError):
    """El intercambio de credenciales con Zoom falló (red, timeout, no-2xx, payload inválido)."""

    code = "provider_error"


class AcquisitionError(GatewayError):
    """No se pudo producir un token válido para este ciclo de request."""

    code = "upstream_authorization_unavailable"


class StoreError(GatewayError):
    """El store de credenciales (Redis) no respondió."""

    code = "store_error"


def authorization_unavailable():
    # 503 con un code propio para distinguirlo de los errores de negocio de Zoom
    body = {"code": AcquisitionError.code, "message": "Upstream authorization unavailable"}
    return jsonify(body), 503


def _upstream_message(response: Optional[requests.Response]) -> Optional[str]:
    if response is None:
        return None
    try:
        data = response.json()
    except ValueError:
        return None
    if isinstance(data, dict):
        return data.get("message")
    return None


def relay_error(exc: Exception, message: str = "Error"):
    """Devuelve el status y el mensaje de Zoom; 500 con `message` si no hubo respuesta."""
    response = getattr(exc, "response", None) if isinstance(exc, requests.RequestException) else None
    status = response.status_code if response is not None else 500
    return jsonify({"message": _upstream_message(response) or message}), status
