"""
Mooder Redis Cache
Spotify 토큰 / 검색 결과 JSON 캐싱
"""

import json
import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)


class RedisCache:
    """Redis 캐시 클라이언트 (연결 실패 시 캐시 없이 진행)"""

    def __init__(self, redis_url: str):
        """
        Args:
            redis_url: Redis 연결 URL (예: redis://localhost:6379/0)
        """
        self.redis_url = redis_url
        self._client: Optional[redis.Redis] = None
        self._connect()

    def _connect(self) -> None:
        """Redis 연결 시도"""
        try:
            self._client = redis.from_url(
                self.redis_url,
                decode_responses=True,
                socket_connect_timeout=2,
                socket_timeout=2
            )
            self._client.ping()
            logger.info(f"Redis 연결 성공: {self.redis_url}")
        except redis.RedisError as e:
            logger.warning(f"Redis 연결 실패 (캐시 없이 진행): {e}")
            self._client = None

    @property
    def is_connected(self) -> bool:
        """Redis 연결 상태"""
        if not self._client:
            return False
        try:
            self._client.ping()
            return True
        except redis.RedisError:
            return False

    def ping(self) -> bool:
        """Redis ping 테스트"""
        return self.is_connected


def make_search_cache_key(market: str, limit: int, query: str) -> str:
    """
    검색 결과 캐시 키 생성

    형식: search:{market}:{limit}:{query}
    """
    return f"search:{market}:{limit}:{query.strip().lower()}"


def get_json(cache: Optional[RedisCache], key: str) -> Optional[dict]:
    """
    캐시에서 JSON 조회

    Args:
        cache: RedisCache 인스턴스 (None이면 None 반환)
        key: 캐시 키

    Returns:
        파싱된 JSON 딕셔너리 또는 None
    """
    if cache is None or not cache.is_connected:
        return None

    try:
        data = cache._client.get(key)
        if data:
            return json.loads(data)
    except (redis.RedisError, ValueError) as e:
        logger.warning(f"캐시 조회 실패: {e}")

    return None


def set_json(
    cache: Optional[RedisCache],
    key: str,
    value: dict,
    ttl_sec: int
) -> None:
    """
    캐시에 JSON 저장 (ttl_sec이 0 이하면 저장하지 않음)
    """
    if cache is None or ttl_sec <= 0 or not cache.is_connected:
        return

    try:
        data = json.dumps(value, ensure_ascii=False)
        cache._client.setex(key, ttl_sec, data)
    except (redis.RedisError, TypeError) as e:
        logger.warning(f"캐시 저장 실패: {e}")


def delete_key(cache: Optional[RedisCache], key: str) -> None:
    """캐시 키 삭제 (캐시 없으면 무시)"""
    if cache is None or not cache.is_connected:
        return

    try:
        cache._client.delete(key)
    except redis.RedisError as e:
        logger.warning(f"캐시 삭제 실패: {e}")
