import redis.asyncio as aioredis

from conference_api.config import get_settings

redis = None


def get_redis_client():
    """Shared Redis client, or None when no REDIS_URL is configured."""
    global redis
    redis_url = get_settings().REDIS_URL
    if not redis_url:
        return None
    if redis is None:
        redis = aioredis.from_url(redis_url, decode_responses=True)
    return redis


async def close_redis_client():
    global redis
    if redis is not None:
        await redis.aclose()
        redis = None
