"""
Mooder Health Check API
헬스 체크 라우터
"""

from typing import List

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    engine_ready: bool
    missing_config: List[str]
    query_generation: bool
    spotify_market: str
    redis_connected: bool


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """
    서버 상태 확인

    - Spotify 자격 증명 / Groq 키 설정 여부
    - Redis 연결 상태
    """
    state = request.app.state
    config = state.config

    redis_connected = False
    if getattr(state, "redis_cache", None) is not None:
        redis_connected = state.redis_cache.ping()

    engine_ready = getattr(state, "engine", None) is not None

    return HealthResponse(
        status="ok" if engine_ready else "degraded",
        engine_ready=engine_ready,
        missing_config=config.missing_required(),
        query_generation=bool(config.GROQ_API_KEY),
        spotify_market=config.SPOTIFY_MARKET,
        redis_connected=redis_connected
    )
