"""
스코어링 테스트 (장르 / 우크라이나 신호 / 시대)
"""

from mooder.core.scoring import (
    filter_by_era,
    gather_text,
    genre_score,
    matches_era,
    ua_signal_score,
)


def test_gather_text(make_candidate):
    c = make_candidate("1", title="Night Drive", album="NEON", artists=["DJ One", "MC Two"])
    assert gather_text(c) == "night drive neon dj one mc two"


def test_genre_score_single_keyword(make_candidate):
    c = make_candidate("1", title="Warehouse Techno Session")
    assert genre_score(c, ["Techno"]) == 9


def test_unselected_genres_score_zero(make_candidate):
    c = make_candidate("1", title="Warehouse Techno Session")
    assert genre_score(c, []) == 0
    assert genre_score(c, ["Jazz"]) == 0


def test_classical_bonus_tokens(make_candidate):
    c = make_candidate("1", title="Piano Concerto No. 1", album="Classical Orchestra Works")
    # classical 10 + piano 6 + orchestra 6 + concerto 6
    assert genre_score(c, ["Classical"]) == 28


def test_chill_keywords(make_candidate):
    c = make_candidate("1", title="Lo-Fi Chill", album="Relax Tapes")
    # chill 10 + relax 8 + lo-fi 7
    assert genre_score(c, ["Chill"]) == 25


def test_keyword_alternatives_count_once(make_candidate):
    c = make_candidate("1", title="Hip Hop Hip-Hop")
    assert genre_score(c, ["Hip-Hop"]) == 9


def test_multiple_genres_are_additive(make_candidate):
    c = make_candidate("1", title="Techno House Mix")
    assert genre_score(c, ["Techno", "House"]) == 18


def test_ua_signal_score(make_candidate):
    assert ua_signal_score(make_candidate("1", artists=["Ukrainian Folk Band"])) == 6
    # україн 6 + і/ї 3
    assert ua_signal_score(make_candidate("2", title="Українська пісня")) == 9
    assert ua_signal_score(make_candidate("3", title="Generic Song")) == 0


def test_matches_era():
    assert matches_era(1995, "1990s") is True
    assert matches_era(1990, "1990s") is True
    assert matches_era(1999, "1990s") is True
    assert matches_era(2001, "1990s") is False
    assert matches_era(None, "1990s") is True
    assert matches_era(1975, "Any") is True


def test_filter_by_era(make_candidate):
    old = make_candidate("old", year=1994)
    new = make_candidate("new", year=2021)
    unknown = make_candidate("unknown")
    assert [c.id for c in filter_by_era([old, new, unknown], "1990s")] == ["old", "unknown"]


def test_filter_by_era_keeps_all_when_nothing_matches(make_candidate):
    candidates = [make_candidate("a", year=2021), make_candidate("b", year=2022)]
    assert filter_by_era(candidates, "1980s") == candidates


def test_unknown_genre_tags_score_zero(make_candidate):
    c = make_candidate("1", title="Lo-Fi Techno")
    assert genre_score(c, ["Lo-Fi"]) == 0
    assert genre_score(c, ["Lo-Fi", "Techno"]) == 9
