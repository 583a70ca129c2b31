"""
Mooder Spotify Catalog
Spotify 토큰 발급(client credentials) + 트랙 검색
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from .cache import RedisCache, delete_key, get_json, set_json, make_search_cache_key
from .errors import ConfigurationError, UpstreamError
from ..utils.timing import Timer

logger = logging.getLogger(__name__)

TOKEN_URL = "https://accounts.spotify.com/api/token"
SEARCH_URL = "https://api.spotify.com/v1/search"
TOKEN_CACHE_KEY_PREFIX = "spotify:app_token"


@dataclass
class Candidate:
    """검색 결과 곡 (코어 내부에서는 읽기 전용)"""
    id: str
    title: str = ""
    artists: List[str] = field(default_factory=list)
    album: str = ""
    release_year: Optional[int] = None
    popularity: int = 0
    url: Optional[str] = None

    @property
    def artist_line(self) -> str:
        return ", ".join(a for a in self.artists if a)

    @property
    def spotify_url(self) -> str:
        return self.url or f"https://open.spotify.com/track/{self.id}"


def _json_object(res: httpx.Response) -> Optional[Dict[str, Any]]:
    """응답 본문이 JSON 객체가 아니면 None"""
    try:
        data = res.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _parse_year(value: Any) -> Optional[int]:
    """release_date("1994-05-01", "1994") 앞 4자리에서 연도 파싱"""
    if not value:
        return None
    try:
        s = str(value)
        if len(s) >= 4:
            return int(s[:4])
    except (ValueError, TypeError):
        pass
    return None


def parse_track(item: Dict[str, Any]) -> Optional[Candidate]:
    """Spotify track 객체 -> Candidate (id 없으면 None)"""
    if not isinstance(item, dict) or not item.get("id"):
        return None
    album = item.get("album") or {}
    artists = [a.get("name") for a in item.get("artists") or [] if isinstance(a, dict) and a.get("name")]
    return Candidate(
        id=str(item["id"]),
        title=item.get("name") or "",
        artists=artists,
        album=album.get("name") or "",
        release_year=_parse_year(album.get("release_date")),
        popularity=int(item.get("popularity") or 0),
        url=(item.get("external_urls") or {}).get("spotify"),
    )


class SpotifyCatalog:
    """
    Spotify 카탈로그 클라이언트

    토큰 발급과 검색은 필수 경로이므로 실패하면 UpstreamError를 그대로 올린다.
    (재시도 없음)
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        http: httpx.Client,
        market: str = "UA",
        limit: int = 50,
        cache: Optional[RedisCache] = None,
        cache_ttl_sec: int = 900
    ):
        """
        Args:
            client_id / client_secret: Spotify 앱 자격 증명 (없으면 ConfigurationError)
            http: 공유 httpx.Client (앱 lifespan에서 생성)
            market: 검색 마켓 코드
            limit: 검색 결과 개수 (Spotify 최대 50)
            cache: RedisCache (None이면 캐시 없이 동작)
            cache_ttl_sec: 검색 결과 캐시 TTL
        """
        if not client_id or not client_secret:
            raise ConfigurationError("SPOTIFY_CLIENT_ID or SPOTIFY_CLIENT_SECRET is missing")
        self.client_id = client_id
        self.client_secret = client_secret
        self.http = http
        self.market = market
        self.limit = limit
        self.cache = cache
        self.cache_ttl_sec = cache_ttl_sec

    @property
    def token_cache_key(self) -> str:
        # 같은 Redis를 쓰는 다른 앱과 토큰이 섞이지 않도록 client_id로 구분
        return f"{TOKEN_CACHE_KEY_PREFIX}:{self.client_id}"

    def get_token(self) -> str:
        """client credentials 토큰 발급 (캐시에 있으면 재사용)"""
        cached = get_json(self.cache, self.token_cache_key)
        if cached and cached.get("access_token"):
            return cached["access_token"]

        try:
            with Timer("spotify token"):
                res = self.http.post(
                    TOKEN_URL,
                    data={"grant_type": "client_credentials"},
                    auth=(self.client_id, self.client_secret),
                )
        except httpx.HTTPError as e:
            raise UpstreamError(f"Spotify token error: {e}") from e

        if not res.is_success:
            raise UpstreamError(f"Spotify token error: {res.text}")

        data = _json_object(res)
        token = data.get("access_token") if data else None
        if not token:
            raise UpstreamError(f"Spotify token error: {res.text}")

        # 만료 60초 전까지만 캐시
        ttl = int(data.get("expires_in", 3600)) - 60
        if ttl > 0:
            set_json(self.cache, self.token_cache_key, {"access_token": token}, ttl)
        return token

    def search_tracks(self, query: str) -> List[Candidate]:
        """
        트랙 검색

        Returns:
            Spotify 검색 순서 그대로의 Candidate 리스트

        Raises:
            UpstreamError: 토큰 발급 또는 검색 실패
        """
        cache_key = make_search_cache_key(self.market, self.limit, query)
        items = get_json(self.cache, cache_key)

        if items is None:
            token = self.get_token()
            params = {
                "q": query,
                "type": "track",
                "limit": str(self.limit),
                "market": self.market,
            }
            try:
                with Timer("spotify search"):
                    res = self.http.get(
                        SEARCH_URL,
                        params=params,
                        headers={"Authorization": f"Bearer {token}"},
                    )
            except httpx.HTTPError as e:
                raise UpstreamError(f"Spotify search error: {e}") from e

            if res.status_code == 401:
                # 캐시된 토큰이 더 이상 유효하지 않음 (자격 증명 교체 등)
                delete_key(self.cache, self.token_cache_key)
            if not res.is_success:
                raise UpstreamError(f"Spotify search error: {res.text}")

            data = _json_object(res)
            if data is None:
                raise UpstreamError(f"Spotify search error: {res.text}")
            tracks = data.get("tracks")
            items = (tracks.get("items") if isinstance(tracks, dict) else None) or []
            # 캐시는 dict 형태로 저장해야 하므로 감싸서 넣음
            set_json(self.cache, cache_key, {"items": items}, self.cache_ttl_sec)
        else:
            logger.debug(f"Cache hit: {cache_key}")
            items = items.get("items") or []

        candidates = [c for c in (parse_track(item) for item in items) if c is not None]
        logger.info(f"Spotify search '{query}' -> {len(candidates)} tracks")
        return candidates
