"""
Mooder Recommendation Schemas
퀴즈 입력 / 추천 응답 스키마
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


MoodLevel = Literal["Low", "Medium", "High"]
Tone = Literal["Happy", "Sad", "Angry", "Calm"]
Context = Literal["Alone", "In pair", "With company"]
Era = Literal["Any", "1980s", "1990s", "2000s", "2010s", "2020s"]


class QuizAnswers(BaseModel):
    """퀴즈 응답 (요청 단위로 불변)"""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    mood_level: MoodLevel = Field(alias="moodLevel")
    tone: Tone
    context: Context
    note: str = ""
    # 열린 목록: 모르는 장르 태그도 받고 점수/검색어에는 반영하지 않음
    genres: List[str] = Field(default_factory=list)
    era: Era = "Any"
    exclude_track_ids: List[str] = Field(default_factory=list, alias="excludeTrackIds")

    @field_validator("note", mode="before")
    @classmethod
    def _none_note(cls, value):
        # 클라이언트가 null을 보내는 경우
        return "" if value is None else value

    @field_validator("genres", "exclude_track_ids", mode="before")
    @classmethod
    def _none_list(cls, value):
        return [] if value is None else value


class RecommendResponse(BaseModel):
    """추천 응답 (선택된 한 곡)"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    artist: str
    spotify_url: Optional[str] = Field(default=None, alias="spotifyUrl")
