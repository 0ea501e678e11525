"""
Redis Repository Base Class

Provides JSON storage, conditional writes and server-side scripts on top of
a Redis client. Connection-level failures surface as StoreUnavailableError.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import redis
from redis.exceptions import RedisError

from ..domain.errors import StoreUnavailableError

logger = logging.getLogger(__name__)


class RedisRepository:
    """Base Redis repository with atomic operations."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = ""):
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _make_key(self, key: str) -> str:
        """Create a prefixed key for Redis storage."""
        return f"{self.key_prefix}:{key}" if self.key_prefix else key

    def set_json_if_absent(self, key: str, data: Dict[str, Any], ttl: Optional[int] = None) -> bool:
        """
        Store JSON data only if the key does not exist yet (``SET NX``).

        Args:
            key: Redis key
            data: Dictionary to store as JSON
            ttl: Time to live in seconds

        Returns:
            True if stored, False if the key already existed

        Raises:
            StoreUnavailableError: If Redis could not be reached
        """
        redis_key = self._make_key(key)
        try:
            stored = self.redis.set(redis_key, json.dumps(data), nx=True, ex=ttl or None)
        except RedisError as e:
            logger.error(f"Error setting JSON data for key {redis_key}: {e}")
            raise StoreUnavailableError(f"Redis SET NX failed for {redis_key}", e) from e
        return bool(stored)

    def get_json(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Get JSON data from Redis.

        Returns:
            Dictionary if found and valid JSON, None otherwise

        Raises:
            StoreUnavailableError: If Redis could not be reached
        """
        redis_key = self._make_key(key)
        try:
            data = self.redis.get(redis_key)
        except RedisError as e:
            logger.error(f"Error getting JSON data for key {redis_key}: {e}")
            raise StoreUnavailableError(f"Redis GET failed for {redis_key}", e) from e

        if data is None:
            return None

        if isinstance(data, bytes):
            data = data.decode("utf-8")
        try:
            return json.loads(data)
        except json.JSONDecodeError as e:
            logger.error(f"Corrupt JSON stored under {redis_key}: {e}")
            return None

    def run_script(self, script: str, keys: List[str], args: List[Any]) -> Any:
        """
        Run a Lua script atomically on the server.

        Keys are prefixed before being passed to the script.

        Raises:
            StoreUnavailableError: If Redis could not be reached or the script failed
        """
        redis_keys = [self._make_key(k) for k in keys]
        try:
            return self.redis.eval(script, len(redis_keys), *redis_keys, *args)
        except RedisError as e:
            logger.error(f"Error running script on {redis_keys}: {e}")
            raise StoreUnavailableError(f"Redis EVAL failed for {redis_keys}", e) from e

    def delete(self, key: str) -> bool:
        """
        Delete a key from Redis.

        Returns:
            True if key was deleted, False if it did not exist

        Raises:
            StoreUnavailableError: If Redis could not be reached
        """
        redis_key = self._make_key(key)
        try:
            return self.redis.delete(redis_key) > 0
        except RedisError as e:
            logger.error(f"Error deleting key {redis_key}: {e}")
            raise StoreUnavailableError(f"Redis DEL failed for {redis_key}", e) from e

    def exists(self, key: str) -> bool:
        """
        Check if a key exists in Redis.

        Raises:
            StoreUnavailableError: If Redis could not be reached
        """
        redis_key = self._make_key(key)
        try:
            return self.redis.exists(redis_key) > 0
        except RedisError as e:
            logger.error(f"Error checking existence of key {redis_key}: {e}")
            raise StoreUnavailableError(f"Redis EXISTS failed for {redis_key}", e) from e


class RedisConnectionManager:
    """Manages Redis connection with connection pooling."""

    def __init__(self, host: str = 'localhost', port: int = 6379, db: int = 0,
                 password: Optional[str] = None, max_connections: int = 20,
                 socket_timeout: Optional[float] = 5.0):
        self.connection_pool = redis.ConnectionPool(
            host=host,
            port=port,
            db=db,
            password=password,
            max_connections=max_connections,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
            retry_on_timeout=True,
            socket_keepalive=True,
        )
        self._client = None

    @property
    def client(self) -> redis.Redis:
        """Get Redis client instance with connection pooling."""
        if self._client is None:
            self._client = redis.Redis(connection_pool=self.connection_pool)
        return self._client

    def health_check(self) -> bool:
        """Check if Redis connection is healthy."""
        try:
            return self.client.ping()
        except RedisError:
            return False

    def close(self):
        """Close the connection pool."""
        if self.connection_pool:
            self.connection_pool.disconnect()
