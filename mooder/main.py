"""
Mooder Backend Main Application
FastAPI 앱 및 startup/shutdown 이벤트
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.cache import RedisCache
from .core.catalog import SpotifyCatalog
from .core.engine import RecommendationEngine
from .core.errors import ConfigurationError
from .core.query import DeterministicQueryStrategy, GeneratedQueryStrategy, GroqQueryGenerator
from .core.signals import KeywordClassifier
from .api import routes_health, routes_recommend
from .utils.logging import setup_logging

# 로깅 설정 (레벨은 lifespan에서 설정값으로 다시 맞춤)
setup_logging()
logger = logging.getLogger(__name__)


def build_engine(
    config: Settings,
    http: httpx.Client,
    cache: Optional[RedisCache] = None
) -> RecommendationEngine:
    """
    설정으로 추천 엔진 구성

    Raises:
        ConfigurationError: Spotify 자격 증명 누락
    """
    catalog = SpotifyCatalog(
        client_id=config.SPOTIFY_CLIENT_ID,
        client_secret=config.SPOTIFY_CLIENT_SECRET,
        http=http,
        market=config.SPOTIFY_MARKET,
        limit=config.SEARCH_LIMIT,
        cache=cache,
        cache_ttl_sec=config.CACHE_TTL_SEC
    )

    # Groq 키가 있을 때만 생성 검색어 사용
    if config.GROQ_API_KEY:
        strategy = GeneratedQueryStrategy(
            GroqQueryGenerator(api_key=config.GROQ_API_KEY, http=http, model=config.GROQ_MODEL),
            fallback=DeterministicQueryStrategy()
        )
    else:
        strategy = DeterministicQueryStrategy()

    return RecommendationEngine(
        catalog=catalog,
        query_strategy=strategy,
        classifier=KeywordClassifier(strict_policy=config.POLICY_STRICT_CYRILLIC),
        top_k=config.TOP_K,
        strict_policy=config.POLICY_STRICT_CYRILLIC
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 라이프사이클 관리"""
    config = get_settings()
    setup_logging(config.LOG_LEVEL)
    app.state.config = config

    logger.info("=" * 60)
    logger.info("Mooder Backend Starting...")
    logger.info("=" * 60)
    logger.info(f"Spotify market: {config.SPOTIFY_MARKET}, search limit: {config.SEARCH_LIMIT}")
    logger.info(f"Query generation: {'groq ' + config.GROQ_MODEL if config.GROQ_API_KEY else 'off'}")

    # Redis 캐시 초기화 (실패해도 캐시 없이 진행)
    app.state.redis_cache = RedisCache(config.REDIS_URL) if config.CACHE_ENABLED else None

    app.state.http = httpx.Client(timeout=config.HTTP_TIMEOUT_SEC)

    app.state.engine_error = None
    try:
        app.state.engine = build_engine(config, app.state.http, app.state.redis_cache)
    except ConfigurationError as e:
        # /health는 계속 응답하고, /api/recommend는 500 반환
        logger.error(f"Engine not initialized: {e}")
        app.state.engine = None
        app.state.engine_error = str(e)

    logger.info("Mooder Backend Ready!")

    yield

    # Shutdown
    logger.info("Mooder Backend Shutting down...")
    app.state.http.close()


app = FastAPI(
    title="Mooder API",
    description="무드 기반 음악 추천 API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 에러 응답은 항상 {"error": "..."} 형식
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    message = f"Invalid request: {loc} {first.get('msg', '')}".strip()
    return JSONResponse(status_code=422, content={"error": message})


app.include_router(routes_health.router)
app.include_router(routes_recommend.router)


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "service": "Mooder API",
        "version": "1.0.0",
        "docs": "/docs"
    }
