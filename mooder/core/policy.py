"""
Mooder Content Policy
러시아어/러시아 관련 곡 차단 필터
(어떤 퀴즈 입력으로도 끌 수 없음, 스코어링 이전에 항상 적용)
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

if TYPE_CHECKING:
    from .catalog import Candidate

logger = logging.getLogger(__name__)


BLOCKED_TOKENS = [
    "russian",
    "росси",
    "росій",
    "росія",
    "москв",
]

# 생성된 검색어 전용 (곡 메타보다 조금 넓게)
FORBIDDEN_QUERY_TOKENS = BLOCKED_TOKENS + [
    "россия",
    "moscow",
]

# strict 모드: 러시아어 표기에만 있는 문자
# NOTE: 벨라루스어(ы, э, ё)나 불가리아어(ъ) 등 다른 키릴 문자 언어도 걸림
STRICT_LETTERS = frozenset("ёыэъ")


def is_blocked_text(text: Optional[str], strict: bool = False) -> bool:
    """텍스트가 차단 키워드(또는 strict 모드의 차단 문자)를 포함하는지"""
    if not text:
        return False
    t = text.lower()
    if any(kw in t for kw in BLOCKED_TOKENS):
        return True
    if strict and any(ch in STRICT_LETTERS for ch in t):
        return True
    return False


def is_blocked_candidate(candidate: "Candidate", strict: bool = False) -> bool:
    """곡 제목, 앨범명, 아티스트 이름 중 하나라도 걸리면 차단"""
    fields: Iterable[Optional[str]] = [candidate.title, candidate.album, *candidate.artists]
    return any(is_blocked_text(field, strict=strict) for field in fields)


def filter_blocked(candidates: List["Candidate"], strict: bool = False) -> List["Candidate"]:
    """
    차단 대상 곡 제거 (남은 곡의 순서는 유지)

    결과가 비어도 차단된 곡으로 되돌리지 않는다.
    호출 측에서 "결과 없음"으로 처리해야 함.
    """
    kept = [c for c in candidates if not is_blocked_candidate(c, strict=strict)]
    dropped = len(candidates) - len(kept)
    if dropped:
        logger.info(f"Policy filter dropped {dropped}/{len(candidates)} tracks")
    return kept


def is_forbidden_query(query: Optional[str]) -> bool:
    """생성된 검색어가 차단 키워드를 포함하는지"""
    t = (query or "").lower()
    return any(kw in t for kw in FORBIDDEN_QUERY_TOKENS)
