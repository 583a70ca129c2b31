"""
Mooder Text Signals
사용자 메모(note)에서 시대/지역 요청 신호 추출
(메모는 어떤 언어로든 올 수 있음: 라틴 + 키릴 키워드 혼용)
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .policy import is_blocked_text


# 시대 패턴 그룹 (순서 중요: 먼저 매칭되는 그룹이 이김)
ERA_PATTERNS: List[Tuple[str, List[re.Pattern]]] = [
    ("1980s", [re.compile(p) for p in (
        r"\b80s\b", r"\b1980s?\b", r"\b198\d\b", r"\b80-х\b", r"\b80х\b",
    )]),
    ("1990s", [re.compile(p) for p in (
        r"\b90s\b", r"\b1990s?\b", r"\b199\d\b", r"\b90-х\b", r"\b90х\b",
    )]),
    ("2000s", [re.compile(p) for p in (
        r"\b00s\b", r"\b2000s?\b", r"\b200\d\b", r"\b00-х\b", r"\b00х\b",
        r"\b2000-х\b", r"\b2000х\b",
    )]),
    ("2010s", [re.compile(p) for p in (
        r"\b2010s?\b", r"\b201\d\b", r"\b2010-х\b", r"\b2010х\b",
    )]),
    ("2020s", [re.compile(p) for p in (
        r"\b2020s?\b", r"\b202\d\b", r"\b2020-х\b", r"\b2020х\b",
    )]),
]

# 명시적인 우크라이나 음악 요청 키워드 (언어 감지가 아니라 직접 언급만)
UA_REQUEST_KEYWORDS = [
    "ukrain",
    " ukr",
    "ukr ",
    "ua rap",
    "ua hip",
    "україн",
    "укр",
    "украї",
    "українс",
    "українськ",
]

US_REQUEST_KEYWORDS = [
    "american",
    "us rap",
    "usa",
    "wu-tang",
    "wu tang",
    "90s hip hop",
    "east coast",
    "west coast",
    "американ",
    "штати",
    "сша",
    "ву-тенг",
    "ву тенг",
]


def _normalize(note: Optional[str]) -> str:
    return (note or "").lower()


def infer_era(note: Optional[str]) -> Optional[str]:
    """메모에서 시대 추정 (첫 번째로 매칭된 그룹의 시대, 없으면 None)"""
    text = _normalize(note)
    for era, patterns in ERA_PATTERNS:
        if any(p.search(text) for p in patterns):
            return era
    return None


def resolve_era(explicit_era: str, inferred_era: Optional[str]) -> str:
    """
    실제 필터링에 쓸 시대

    사용자가 직접 고른 시대가 "Any"가 아니면 항상 그 값을 사용하고,
    "Any"일 때만 메모에서 추정한 시대로 대체한다.
    """
    if explicit_era != "Any":
        return explicit_era
    return inferred_era or "Any"


def effective_era(explicit_era: str, note: Optional[str]) -> str:
    return resolve_era(explicit_era, infer_era(note))


def is_explicit_ua_request(note: Optional[str]) -> bool:
    text = _normalize(note)
    return any(kw in text for kw in UA_REQUEST_KEYWORDS)


def is_explicit_us_request(note: Optional[str]) -> bool:
    text = _normalize(note)
    return any(kw in text for kw in US_REQUEST_KEYWORDS)


@dataclass(frozen=True)
class NoteSignals:
    """메모 분류 결과"""
    era: Optional[str] = None
    ua_requested: bool = False
    us_requested: bool = False
    policy_violation: bool = False


class KeywordClassifier:
    """
    키워드/정규식 기반 메모 분류기

    engine은 classify(text) -> NoteSignals 인터페이스에만 의존하므로
    언어 인식 분류기로 교체할 때 랭킹 로직은 건드리지 않아도 된다.
    """

    def __init__(self, strict_policy: bool = False):
        self.strict_policy = strict_policy

    def classify(self, text: Optional[str]) -> NoteSignals:
        return NoteSignals(
            era=infer_era(text),
            ua_requested=is_explicit_ua_request(text),
            us_requested=is_explicit_us_request(text),
            policy_violation=is_blocked_text(text, strict=self.strict_policy),
        )
