"""
공통 테스트 픽스처
"""

import numpy as np
import pytest

from mooder.core.catalog import Candidate
from mooder.schemas.recommend import QuizAnswers


class FakeCatalog:
    """고정된 검색 결과를 돌려주는 catalog (검색어 기록)"""

    def __init__(self, candidates=None, error=None):
        self.candidates = list(candidates or [])
        self.error = error
        self.queries = []

    def search_tracks(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.candidates)


def _candidate(id, title="", artists=None, album="", year=None, popularity=0, url=None):
    return Candidate(
        id=id,
        title=title,
        artists=list(artists or []),
        album=album,
        release_year=year,
        popularity=popularity,
        url=url,
    )


def _answers(**overrides):
    data = {
        "moodLevel": "Medium",
        "tone": "Happy",
        "context": "Alone",
        "note": "",
        "genres": [],
        "era": "Any",
        "excludeTrackIds": [],
    }
    data.update(overrides)
    return QuizAnswers(**data)


@pytest.fixture
def make_candidate():
    return _candidate


@pytest.fixture
def make_answers():
    return _answers


@pytest.fixture
def fake_catalog():
    return FakeCatalog


@pytest.fixture
def rng():
    return np.random.default_rng(42)
