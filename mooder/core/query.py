"""
Mooder Query Builder
퀴즈 응답 -> Spotify 검색어
(기본 규칙 기반 검색어 + 선택적 Groq 생성 검색어)
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

import httpx

from .policy import is_forbidden_query
from .signals import NoteSignals
from ..schemas.recommend import QuizAnswers
from ..utils.timing import Timer

logger = logging.getLogger(__name__)

GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_QUERY = "chill music"

# 장르 -> 검색어 구문 (검색어 맨 앞에 붙음)
GENRE_PHRASES = {
    "Classical": "classical piano orchestra",
    "Chill": "chill relax",
    "Instrumental": "instrumental",
    "Ambient": "ambient",
    "Jazz": "jazz",
    "Metal": "metal",
    "Hip-Hop": "hip hop rap",
    "Drum & Bass": "drum and bass dnb",
    "Techno": "techno",
    "House": "house",
    "Electronic": "electronic",
    "Pop": "pop",
    "Rock": "rock",
}

CONTEXT_WORDS = {
    "In pair": "romantic",
    "With company": "party",
    "Alone": "solo",
}

SYSTEM_PROMPT = "\n".join([
    "You build Spotify search queries for music recommendations.",
    "- The user's note may be in ANY language. Interpret it.",
    "- Genre selection from the UI is the top priority. Never override it. "
    "If no genres are provided, infer a reasonable genre/era from the note.",
    "- Ukrainian language alone does NOT mean the user wants Ukrainian music. "
    "Only prioritize Ukrainian artists/tracks if the explicit Ukrainian request flag is true.",
    "- If the explicit American/US intent flag is true, favor American/US results and "
    "do not bias toward Ukrainian unless the Ukrainian request flag is also true.",
    "- Detect and use era hints in the note (80s/90s/00s/2010s/2020s) when the era is Any.",
    "- Do NOT produce Russian-language or Russia-related results.",
    "- Use mood level, tone, and context: Alone / In pair / With company.",
    "- Output ONLY a short plain text Spotify query (a few words). No quotes, no explanations.",
])


def build_fallback_query(
    answers: QuizAnswers,
    effective_era: str,
    ua_requested: bool,
    us_requested: bool
) -> str:
    """
    규칙 기반 검색어 (항상 같은 입력 -> 같은 결과)

    순서: 장르 > 지역 힌트(US, UA) > 메모 > tone > mood > context > 시대
    장르가 검색어를 주도하도록 가장 앞에 둔다.
    """
    parts = [GENRE_PHRASES[g] for g in answers.genres if g in GENRE_PHRASES]

    if us_requested:
        parts.append("american us")
    if ua_requested:
        parts.append("ukrainian ua")

    if answers.note:
        parts.append(answers.note.lower())

    parts.append(answers.tone.lower())
    parts.append(answers.mood_level.lower())
    parts.append(CONTEXT_WORDS.get(answers.context, "solo"))

    if effective_era != "Any":
        parts.append(effective_era.lower())

    query = " ".join(parts).strip()
    return query or DEFAULT_QUERY


@dataclass(frozen=True)
class QueryResult:
    """검색어 생성 결과 (Ok(query) | Err(reason))"""
    query: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, query: str) -> "QueryResult":
        return cls(query=query)

    @classmethod
    def err(cls, reason: str) -> "QueryResult":
        return cls(error=reason)

    @property
    def is_ok(self) -> bool:
        return self.query is not None


def _user_message(answers: QuizAnswers, signals: NoteSignals, effective_era: str) -> str:
    return "\n".join([
        f"Mood level: {answers.mood_level}",
        f"Tone: {answers.tone}",
        f"Context: {answers.context}",
        f"User note: {answers.note or 'no extra details'}",
        f"Explicit Ukrainian request: {'yes' if signals.ua_requested else 'no'}",
        f"Explicit American request: {'yes' if signals.us_requested else 'no'}",
        f"Preferred genres: {', '.join(answers.genres) or 'none'}",
        f"Preferred era: {answers.era}",
        f"Era hint from note: {signals.era or 'none'}",
        f"Era to use (after hint): {effective_era}",
    ])


def clean_generated_query(content: Optional[str]) -> Optional[str]:
    """따옴표/줄바꿈 제거 후 3자 미만이면 None"""
    if not content or len(content.strip()) < 3:
        return None
    cleaned = re.sub(r"[\"'\n\r]+", " ", content.strip()).strip()
    if len(cleaned) < 3:
        return None
    return cleaned


class GroqQueryGenerator:
    """
    Groq chat completion으로 검색어 생성

    선택 기능이므로 어떤 실패도 예외로 올리지 않고 QueryResult.err로 돌려준다.
    """

    def __init__(
        self,
        api_key: str,
        http: httpx.Client,
        model: str = "mixtral-8x7b-32768",
        temperature: float = 0.25,
        max_tokens: int = 60
    ):
        self.api_key = api_key
        self.http = http
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    def generate(self, answers: QuizAnswers, signals: NoteSignals, effective_era: str) -> QueryResult:
        if not self.api_key:
            return QueryResult.err("GROQ_API_KEY is not set")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": _user_message(answers, signals, effective_era)},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        try:
            with Timer("groq completion"):
                res = self.http.post(
                    GROQ_URL,
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
        except httpx.HTTPError as e:
            return QueryResult.err(f"Groq request failed: {e}")

        if not res.is_success:
            return QueryResult.err(f"Groq API error: {res.text}")

        try:
            content = res.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            return QueryResult.err(f"Unexpected Groq response: {e}")

        cleaned = clean_generated_query(content)
        if cleaned is None:
            return QueryResult.err("Groq returned an empty query")
        if is_forbidden_query(cleaned):
            return QueryResult.err(f"Groq query rejected by policy: {cleaned}")
        return QueryResult.ok(cleaned)


class DeterministicQueryStrategy:
    """규칙 기반 검색어만 사용"""

    def build(self, answers: QuizAnswers, signals: NoteSignals, effective_era: str) -> str:
        return build_fallback_query(
            answers,
            effective_era=effective_era,
            ua_requested=signals.ua_requested,
            us_requested=signals.us_requested,
        )


class GeneratedQueryStrategy:
    """생성 검색어 우선, 실패하면 규칙 기반 검색어로 대체"""

    def __init__(self, generator: GroqQueryGenerator, fallback: Optional[DeterministicQueryStrategy] = None):
        self.generator = generator
        self.fallback = fallback or DeterministicQueryStrategy()

    def build(self, answers: QuizAnswers, signals: NoteSignals, effective_era: str) -> str:
        result = self.generator.generate(answers, signals, effective_era)
        if result.is_ok:
            return result.query
        logger.warning(f"Using fallback query: {result.error}")
        return self.fallback.build(answers, signals, effective_era)
