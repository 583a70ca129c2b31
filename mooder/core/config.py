"""
Mooder Backend Configuration
환경변수 기반 설정 관리
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Spotify (카탈로그 검색, 필수)
    SPOTIFY_CLIENT_ID: str = Field(default="", description="Spotify client id")
    SPOTIFY_CLIENT_SECRET: str = Field(default="", description="Spotify client secret")
    SPOTIFY_MARKET: str = Field(default="UA", min_length=2, max_length=2, description="검색 마켓 코드")
    SEARCH_LIMIT: int = Field(default=50, ge=1, le=50, description="검색 결과 개수")

    # Groq (검색어 생성, 선택)
    GROQ_API_KEY: str = Field(default="", description="Groq API 키 (없으면 기본 검색어만 사용)")
    GROQ_MODEL: str = Field(default="mixtral-8x7b-32768", description="Groq 모델 이름")

    # 외부 로그인 연동용 세션 시크릿 (코어에서는 사용하지 않음)
    SESSION_SECRET: str = Field(default="", description="세션 시크릿")

    # Ranking settings
    TOP_K: int = Field(default=5, ge=1, le=50, description="랜덤 선택 대상 상위 곡 수")
    POLICY_STRICT_CYRILLIC: bool = Field(
        default=False,
        description="ё/ы/э/ъ 문자가 있으면 차단 (다른 키릴 문자 언어 오탐 가능)"
    )

    HTTP_TIMEOUT_SEC: float = Field(default=10.0, gt=0, description="외부 HTTP 타임아웃 (초)")

    # Redis settings
    CACHE_ENABLED: bool = Field(default=True, description="Redis 캐시 사용 여부")
    REDIS_URL: str = Field(default="redis://localhost:6379/0", description="Redis 연결 URL")
    CACHE_TTL_SEC: int = Field(default=900, ge=0, description="검색 결과 캐시 TTL (초)")

    LOG_LEVEL: str = Field(default="INFO", description="로그 레벨")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    def missing_required(self) -> List[str]:
        """비어 있는 필수 설정 이름 목록"""
        missing = []
        if not self.SPOTIFY_CLIENT_ID:
            missing.append("SPOTIFY_CLIENT_ID")
        if not self.SPOTIFY_CLIENT_SECRET:
            missing.append("SPOTIFY_CLIENT_SECRET")
        return missing


def get_settings() -> Settings:
    return Settings()
