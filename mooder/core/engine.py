"""
Mooder Recommendation Engine
퀴즈 응답 -> 검색어 -> Spotify 검색 -> 정책 필터 -> 시대 필터 -> 랭킹 -> Top-K 랜덤 선택
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

import numpy as np

from .catalog import Candidate
from .errors import NoResultsError
from .policy import filter_blocked
from .query import DeterministicQueryStrategy
from .scoring import filter_by_era, genre_score, ua_signal_score
from .signals import KeywordClassifier, resolve_era
from ..schemas.recommend import QuizAnswers

logger = logging.getLogger(__name__)


@dataclass
class RankedResult:
    """랭킹 점수가 붙은 후보"""
    candidate: Candidate
    genre_score: int
    region_score: int
    popularity: int


def rank_candidates(
    candidates: Sequence[Candidate],
    genres: Iterable[str],
    ua_requested: bool
) -> List[RankedResult]:
    """
    후보 정렬

    1. 장르 점수 (내림차순)
    2. 우크라이나 신호 점수 (명시적 요청이 있을 때만)
    3. popularity (내림차순)
    모두 같으면 검색 결과 순서 유지 (np.lexsort는 안정 정렬)
    """
    genres = list(genres)
    results = [
        RankedResult(
            candidate=c,
            genre_score=genre_score(c, genres),
            region_score=ua_signal_score(c) if ua_requested else 0,
            popularity=c.popularity,
        )
        for c in candidates
    ]
    if not results:
        return results

    genre_arr = np.array([r.genre_score for r in results])
    region_arr = np.array([r.region_score for r in results])
    pop_arr = np.array([r.popularity for r in results])

    # lexsort는 마지막 키가 1순위
    order = np.lexsort((-pop_arr, -region_arr, -genre_arr))
    return [results[i] for i in order]


def pick_top_k(
    ranked: List[RankedResult],
    exclude_ids: Iterable[str],
    k: int,
    rng: np.random.Generator
) -> RankedResult:
    """
    제외 목록을 뺀 상위 k개 중 하나를 균등 랜덤으로 선택

    제외 후 남는 곡이 없으면 제외 목록을 무시한다.
    """
    exclude = set(exclude_ids)
    filtered = [r for r in ranked if r.candidate.id not in exclude]
    if not filtered:
        logger.info("All ranked tracks were excluded, ignoring exclusion list")
        filtered = ranked

    top = filtered[:k]
    return top[int(rng.integers(len(top)))]


class RecommendationEngine:
    """
    무드 기반 추천 엔진

    요청 간 공유하는 가변 상태 없음 (catalog의 HTTP 클라이언트/캐시 제외)
    """

    def __init__(
        self,
        catalog: Any,
        query_strategy: Optional[Any] = None,
        classifier: Optional[Any] = None,
        top_k: int = 5,
        strict_policy: bool = False,
        rng: Optional[np.random.Generator] = None
    ):
        """
        Args:
            catalog: search_tracks(query) -> List[Candidate] 를 제공하는 객체
            query_strategy: build(answers, signals, era) -> str (기본: 규칙 기반)
            classifier: classify(text) -> NoteSignals (기본: 키워드 분류기)
            top_k: 랜덤 선택 대상 상위 곡 수
            strict_policy: 정책 필터 strict 모드 (서버 설정에서만 결정)
            rng: 난수 생성기 (테스트에서 시드 고정용)
        """
        self.catalog = catalog
        self.query_strategy = query_strategy or DeterministicQueryStrategy()
        self.classifier = classifier or KeywordClassifier(strict_policy=strict_policy)
        self.top_k = top_k
        self.strict_policy = strict_policy
        self.rng = rng or np.random.default_rng()

        logger.info(
            f"Engine 초기화: strategy={type(self.query_strategy).__name__}, "
            f"top_k={top_k}, strict_policy={strict_policy}"
        )

    def recommend(self, answers: QuizAnswers) -> Dict[str, Any]:
        """
        추천 실행

        Returns:
            {
                "track": Candidate,
                "query": str,
                "effective_era": str,
                "ranked": int
            }

        Raises:
            NoResultsError: 검색 결과 없음 / 전부 정책 필터에 걸림
            UpstreamError, ConfigurationError: catalog에서 그대로 올라옴
        """
        signals = self.classifier.classify(answers.note)
        era = resolve_era(answers.era, signals.era)
        if signals.policy_violation:
            logger.warning("Note mentions blocked content; results will still be filtered")

        query = self.query_strategy.build(answers, signals, era)
        logger.info(f"Search query: '{query}' (era={era}, ua={signals.ua_requested}, us={signals.us_requested})")

        candidates = self.catalog.search_tracks(query)
        if not candidates:
            raise NoResultsError("No tracks found for this mood")

        candidates = filter_blocked(candidates, strict=self.strict_policy)
        if not candidates:
            raise NoResultsError("No non-russian tracks found for this query")

        candidates = filter_by_era(candidates, era)

        ranked = rank_candidates(candidates, answers.genres, ua_requested=signals.ua_requested)
        picked = pick_top_k(ranked, answers.exclude_track_ids, self.top_k, self.rng)

        return {
            "track": picked.candidate,
            "query": query,
            "effective_era": era,
            "ranked": len(ranked),
        }
