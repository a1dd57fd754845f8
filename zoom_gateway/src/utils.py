import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional

from flask import current_app, request


class _Call:
    def __init__(self):
        self.future: Future = Future()
        self.callers = 1


class SingleFlight:
    """Una sola ejecución en curso por key; las llamadas concurrentes comparten su resultado.

    El líder ejecuta `fn`; los demás esperan su Future (con timeout). La entrada se
    libera siempre antes de publicar el resultado, así que quien llega después de
    un fallo arranca un intento nuevo en lugar de recibir el error viejo.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._calls: Dict[str, _Call] = {}

    def do(self, key: str, fn: Callable[[], Any], timeout: Optional[float] = None) -> Any:
        with self._lock:
            call = self._calls.get(key)
            leader = call is None
            if leader:
                call = self._calls[key] = _Call()
            else:
                call.callers += 1

        if not leader:
            # concurrent.futures.TimeoutError si el líder no termina a tiempo
            return call.future.result(timeout=timeout)

        try:
            result = fn()
        except BaseException as exc:
            self._release(key)
            call.future.set_exception(exc)
            raise
        self._release(key)
        call.future.set_result(result)
        return result

    def in_flight(self, key: str) -> int:
        """Número de llamadas compartiendo la ejecución en curso (0 si no hay)."""
        with self._lock:
            call = self._calls.get(key)
            return call.callers if call else 0

    def _release(self, key: str) -> None:
        with self._lock:
            self._calls.pop(key, None)


def query_params(*names: str) -> Dict[str, str]:
    """Query string del request entrante, solo con los parámetros presentes."""
    return {name: request.args[name] for name in names if name in request.args}


def current_zoom():
    return current_app.extensions["zoom_service"]
