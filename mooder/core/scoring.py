"""
Mooder Scoring Utilities
장르 / 우크라이나 신호 점수, 시대 매칭
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from .catalog import Candidate


# =============================================================================
# 텍스트 수집
# =============================================================================

def gather_text(candidate: Candidate) -> str:
    """곡 제목 + 앨범명 + 아티스트 이름 (소문자)"""
    parts = [candidate.title, candidate.album, *candidate.artists]
    return " ".join(p for p in parts if p).lower()


# =============================================================================
# 장르 점수
# =============================================================================

# 장르별 (키워드 묶음, 가중치). 묶음 안의 키워드 중 하나만 있어도 가중치 1회 가산
GENRE_KEYWORDS: Dict[str, List[Tuple[Tuple[str, ...], int]]] = {
    "Classical": [
        (("classical",), 10),
        (("piano",), 6),
        (("orchestra",), 6),
        (("symphony",), 6),
        (("concerto",), 6),
        (("instrumental",), 4),
    ],
    "Chill": [
        (("chill",), 10),
        (("relax",), 8),
        (("lofi", "lo-fi"), 7),
        (("ambient",), 5),
        (("downtempo",), 5),
    ],
    "Instrumental": [
        (("instrumental",), 8),
        (("piano",), 4),
    ],
    "Ambient": [
        (("ambient",), 9),
    ],
    "Hip-Hop": [
        (("hip hop", "hip-hop"), 9),
        (("rap",), 7),
    ],
    "Drum & Bass": [
        (("drum and bass", "drum & bass", "dnb"), 9),
        (("liquid",), 5),
    ],
    "Techno": [(("techno",), 9)],
    "House": [(("house",), 9)],
    "Electronic": [
        (("electronic",), 7),
        (("edm",), 5),
    ],
    "Rock": [(("rock",), 8)],
    "Pop": [(("pop",), 7)],
    "Jazz": [(("jazz",), 9)],
    "Metal": [(("metal",), 9)],
}


def genre_score(candidate: Candidate, genres: Iterable[str]) -> int:
    """
    선택한 장르 기준 키워드 점수 (단순 합산, 정규화 없음)

    선택하지 않은 장르는 0점. 장르 일치가 랭킹 최우선이므로
    여러 키워드/장르가 맞을수록 높은 점수가 나온다.
    """
    text = gather_text(candidate)
    score = 0
    for genre in genres:
        for keywords, weight in GENRE_KEYWORDS.get(genre, []):
            if any(kw in text for kw in keywords):
                score += weight
    return score


# =============================================================================
# 우크라이나 신호 점수 (명시적 요청이 있을 때만 랭킹에 사용)
# =============================================================================

UA_LETTERS = re.compile(r"[іїґ]")


def ua_signal_score(candidate: Candidate) -> int:
    text = gather_text(candidate)
    score = 0
    if "ukrain" in text:
        score += 6
    if "україн" in text:
        score += 6
    if UA_LETTERS.search(text):
        score += 3
    return score


# =============================================================================
# 시대 매칭
# =============================================================================

ERA_RANGES: Dict[str, Tuple[int, int]] = {
    "1980s": (1980, 1989),
    "1990s": (1990, 1999),
    "2000s": (2000, 2009),
    "2010s": (2010, 2019),
    "2020s": (2020, 2029),
}


def matches_era(year: Optional[int], era: str) -> bool:
    """연도를 모르거나 "Any"면 통과"""
    if not year or era not in ERA_RANGES:
        return True
    start, end = ERA_RANGES[era]
    return start <= year <= end


def filter_by_era(candidates: List[Candidate], era: str) -> List[Candidate]:
    """시대 필터 (전부 걸러지면 원래 리스트 유지)"""
    with_era = [c for c in candidates if matches_era(c.release_year, era)]
    return with_era or candidates
