"""
메모 신호 추출 테스트

- 시대 추정 (첫 매칭 그룹 우선, 명시 선택이 항상 우선)
- 우크라이나 / 미국 명시 요청 키워드
"""

import pytest

from mooder.core.signals import (
    KeywordClassifier,
    effective_era,
    infer_era,
    is_explicit_ua_request,
    is_explicit_us_request,
)


@pytest.mark.parametrize("note, expected", [
    ("best 90s hip hop", "1990s"),
    ("something from 1985 please", "1980s"),
    ("The 1990s were great", "1990s"),
    ("пісні 80-х", "1980s"),
    ("музика 90х", "1990s"),
    ("early 00s pop", "2000s"),
    ("2015 summer", "2010s"),
    ("hits of 2023", "2020s"),
])
def test_infer_era_patterns(note, expected):
    assert infer_era(note) == expected


def test_infer_era_first_group_wins():
    """여러 시대가 섞이면 먼저 정의된 그룹이 이김"""
    assert infer_era("2020s remix of 80s classics") == "1980s"


def test_infer_era_no_match():
    assert infer_era("chill evening walk") is None
    assert infer_era("1975 disco") is None
    assert infer_era("") is None
    assert infer_era(None) is None
    # 단어 경계가 없으면 매칭하지 않음
    assert infer_era("track1990x") is None


def test_explicit_era_always_wins():
    for era in ["1980s", "1990s", "2000s", "2010s", "2020s"]:
        assert effective_era(era, "90s hip hop") == era
        assert effective_era(era, "") == era


def test_any_era_uses_note():
    assert effective_era("Any", "I want 90s") == "1990s"
    assert effective_era("Any", "no hint here") == "Any"


def test_explicit_ua_request():
    assert is_explicit_ua_request("ukrainian rap") is True
    assert is_explicit_ua_request("UA rap please") is True
    assert is_explicit_ua_request("some ukr rock") is True
    assert is_explicit_ua_request("українська музика") is True
    assert is_explicit_ua_request("щось укр") is True


def test_ua_request_not_language_detection():
    """우크라이나어로 썼다고 해서 우크라이나 음악 요청은 아님"""
    assert is_explicit_ua_request("хочу щось спокійне на вечір") is False
    assert is_explicit_ua_request("rap") is False
    assert is_explicit_ua_request("") is False
    assert is_explicit_ua_request(None) is False


def test_explicit_us_request():
    assert is_explicit_us_request("American rock") is True
    assert is_explicit_us_request("wu-tang style beats") is True
    assert is_explicit_us_request("east coast vibes") is True
    assert is_explicit_us_request("реп із сша") is True
    assert is_explicit_us_request("ву тенг") is True
    assert is_explicit_us_request("jazz at night") is False


def test_classifier_bundles_signals():
    signals = KeywordClassifier().classify("ukrainian rap from the 90s")
    assert signals.era == "1990s"
    assert signals.ua_requested is True
    assert signals.us_requested is False
    assert signals.policy_violation is False


def test_classifier_policy_violation():
    assert KeywordClassifier().classify("russian rock").policy_violation is True
    assert KeywordClassifier().classify("Съёмки").policy_violation is False
    assert KeywordClassifier(strict_policy=True).classify("Съёмки").policy_violation is True
