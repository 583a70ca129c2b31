"""
Mooder Core Errors
추천 파이프라인 예외 정의
"""


class ConfigurationError(RuntimeError):
    """필수 설정(자격 증명) 누락"""


class UpstreamError(RuntimeError):
    """Spotify 토큰 발급/검색 실패 (응답 본문을 메시지에 포함)"""


class NoResultsError(ValueError):
    """검색 결과 없음 또는 정책 필터 후 남은 곡 없음"""
