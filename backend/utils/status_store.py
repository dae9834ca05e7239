"""
Read-only access to the factory status record in Redis.

The factory process writes the record; this service only ever issues GET.
"""

from typing import Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from config import Settings
from models.errors import InvalidStatusRecord, StoreUnavailable
from utils.logging import get_logger

logger = get_logger("status_store")


class StatusStore:
    """Thin wrapper around a Redis client that maps failures to StoreUnavailable."""

    def __init__(self, client: Redis, key: str = "factory:status"):
        self.client = client
        self.key = key

    @classmethod
    def from_settings(cls, settings: Settings) -> "StatusStore":
        """
        Build a store from connection settings.

        Raises:
            StoreUnavailable: If the endpoint URL or access token is missing, or
                the URL is not a redis://, rediss:// or unix:// address.
        """
        if not settings.store_configured:
            raise StoreUnavailable("Missing status store credentials (STATUS_STORE_URL / STATUS_STORE_TOKEN)")

        try:
            client = redis.from_url(
                settings.STATUS_STORE_URL,
                password=settings.STATUS_STORE_TOKEN.get_secret_value(),
                decode_responses=True,
                socket_timeout=settings.STORE_SOCKET_TIMEOUT,
                socket_connect_timeout=settings.STORE_SOCKET_TIMEOUT,
            )
        except ValueError as e:
            logger.error(
                "Invalid status store URL",
                extra={"data": {"error": str(e)}}
            )
            raise StoreUnavailable(f"Invalid status store URL: {e}") from e

        logger.info(
            "Status store client created",
            extra={
                "data": {
                    "key": settings.STATUS_KEY,
                }
            }
        )
        return cls(client, key=settings.STATUS_KEY)

    async def get_raw(self, key: Optional[str] = None) -> Optional[str]:
        """
        Fetch the serialized record.

        Returns:
            The stored JSON string, or None when the key has never been written.

        Raises:
            StoreUnavailable: On any connection, auth or protocol failure.
            InvalidStatusRecord: If the stored value is not valid UTF-8.
        """
        key = key or self.key
        try:
            value = await self.client.get(key)
        except RedisError as e:
            logger.error(
                "Failed to read status record",
                exc_info=True,
                extra={
                    "data": {
                        "key": key,
                        "error": str(e)
                    }
                }
            )
            raise StoreUnavailable(f"Status store read failed: {e}") from e
        except UnicodeDecodeError as e:
            raise InvalidStatusRecord(f"Stored status record is not valid UTF-8: {e.reason}") from e

        if isinstance(value, bytes):
            try:
                value = value.decode("utf-8")
            except UnicodeDecodeError as e:
                raise InvalidStatusRecord(f"Stored status record is not valid UTF-8: {e.reason}") from e
        return value

    async def ping(self) -> bool:
        """Return True if the store answers a PING."""
        try:
            return bool(await self.client.ping())
        except RedisError as e:
            logger.warning(
                "Status store ping failed",
                extra={"data": {"error": str(e)}}
            )
            return False

    async def close(self) -> None:
        try:
            await self.client.aclose()
            logger.info("Status store connection closed")
        except RedisError as e:
            logger.error(f"Error closing status store connection: {e}")
