"""Store compartido (Redis) para el token activo del gateway."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import redis

from ..errors import StoreError

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """Capacidad mínima que el cache necesita: get, set con TTL y delete."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str, ttl: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        pass


class RedisCredentialStore(CredentialStore):
    def __init__(self, client: redis.Redis):
        self.redis = client

    @classmethod
    def from_url(cls, url: str, socket_timeout: float = 5) -> "RedisCredentialStore":
        client = redis.Redis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=socket_timeout,
            socket_timeout=socket_timeout,
            health_check_interval=30,
        )
        return cls(client)

    def get(self, key: str) -> Optional[str]:
        try:
            return self.redis.get(key)
        except redis.RedisError as exc:
            raise StoreError(f"Redis GET {key} failed: {exc}") from exc

    def set(self, key: str, value: str, ttl: int) -> None:
        try:
            self.redis.set(key, value, ex=ttl)
        except redis.RedisError as exc:
            raise StoreError(f"Redis SET {key} failed: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self.redis.delete(key)
        except redis.RedisError as exc:
            raise StoreError(f"Redis DEL {key} failed: {exc}") from exc

    def ping(self) -> bool:
        try:
            return bool(self.redis.ping())
        except redis.RedisError as exc:
            logger.warning("Redis ping failed: %s", exc)
            return False

    def close(self) -> None:
        try:
            self.redis.close()
        except redis.RedisError as exc:
            raise StoreError(f"Redis close failed: {exc}") from exc
        logger.info("Redis connection closed")
