"""
Mooder Logging Configuration
로깅 설정
"""

import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """로깅 설정 (level은 "DEBUG", "INFO" 등 이름으로 받음)"""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)  # 표준 출력(터미널)으로 로그 보냄
        ]
    )
    # basicConfig는 핸들러가 이미 있으면 아무것도 하지 않으므로 레벨은 직접 설정
    logging.getLogger().setLevel(log_level)
    # httpx는 요청마다 INFO 로그를 남기므로 한 단계 올림
    logging.getLogger("httpx").setLevel(logging.WARNING)
