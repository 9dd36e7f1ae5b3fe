from redis.asyncio import Redis

# Global Redis client instance, opened in the application lifespan
redis_client: Redis | None = None


async def get_redis() -> Redis:
    """
    Get the Redis client instance.

    Returns:
        Redis client instance

    Raises:
        RuntimeError: If Redis client is not initialized
    """
    if redis_client is None:
        raise RuntimeError("Redis client is not initialized")
    return redis_client


async def ping() -> bool:
    """Return True when the shared Redis client answers PING."""
    if redis_client is None:
        return False
    return bool(await redis_client.ping())
