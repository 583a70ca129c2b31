"""
Spotify 카탈로그 클라이언트 테스트 (httpx.MockTransport)
"""

import base64

import httpx
import pytest

from mooder.core.catalog import SpotifyCatalog, parse_track
from mooder.core.errors import ConfigurationError, UpstreamError


TRACK = {
    "id": "t1",
    "name": "Night Drive",
    "popularity": 64,
    "artists": [{"name": "DJ One"}, {"name": "MC Two"}, {}],
    "album": {"name": "Neon", "release_date": "1994-05-01"},
    "external_urls": {"spotify": "https://open.spotify.com/track/t1"},
}


def _catalog(handler, **kwargs):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return SpotifyCatalog("client-id", "client-secret", http=http, **kwargs)


def test_parse_track():
    c = parse_track(TRACK)
    assert c.id == "t1"
    assert c.title == "Night Drive"
    assert c.artists == ["DJ One", "MC Two"]
    assert c.album == "Neon"
    assert c.release_year == 1994
    assert c.popularity == 64
    assert c.artist_line == "DJ One, MC Two"
    assert c.spotify_url == "https://open.spotify.com/track/t1"


def test_parse_track_missing_fields():
    c = parse_track({"id": "t2", "popularity": None, "album": {"release_date": ""}})
    assert c.title == ""
    assert c.artists == []
    assert c.release_year is None
    assert c.popularity == 0
    assert c.spotify_url == "https://open.spotify.com/track/t2"
    assert parse_track({"name": "no id"}) is None


def test_search_tracks_flow():
    seen = {}
    expected_basic = "Basic " + base64.b64encode(b"client-id:client-secret").decode()

    def handler(request):
        if request.url.host == "accounts.spotify.com":
            seen["token_auth"] = request.headers["Authorization"]
            seen["token_body"] = request.content.decode()
            return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
        seen["search_auth"] = request.headers["Authorization"]
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"tracks": {"items": [TRACK, {"no": "id"}]}})

    candidates = _catalog(handler, market="UA", limit=50).search_tracks("techno happy")

    assert [c.id for c in candidates] == ["t1"]
    assert seen["token_auth"] == expected_basic
    assert seen["token_body"] == "grant_type=client_credentials"
    assert seen["search_auth"] == "Bearer tok"
    assert seen["params"] == {"q": "techno happy", "type": "track", "limit": "50", "market": "UA"}


def test_search_empty_result():
    def handler(request):
        if request.url.host == "accounts.spotify.com":
            return httpx.Response(200, json={"access_token": "tok"})
        return httpx.Response(200, json={"tracks": {"items": []}})

    assert _catalog(handler).search_tracks("nothing") == []


def test_token_error_includes_upstream_body():
    def handler(request):
        return httpx.Response(400, text='{"error":"invalid_client"}')

    with pytest.raises(UpstreamError, match="Spotify token error: .*invalid_client"):
        _catalog(handler).search_tracks("jazz")


def test_search_error_includes_upstream_body():
    def handler(request):
        if request.url.host == "accounts.spotify.com":
            return httpx.Response(200, json={"access_token": "tok"})
        return httpx.Response(502, text="bad gateway")

    with pytest.raises(UpstreamError, match="Spotify search error: bad gateway"):
        _catalog(handler).search_tracks("jazz")


def test_transport_error_is_upstream_error():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(UpstreamError, match="Spotify token error"):
        _catalog(handler).search_tracks("jazz")


def test_missing_credentials():
    http = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    with pytest.raises(ConfigurationError, match="SPOTIFY_CLIENT_ID or SPOTIFY_CLIENT_SECRET is missing"):
        SpotifyCatalog("", "secret", http=http)


def test_token_non_json_body_is_upstream_error():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(UpstreamError, match="Spotify token error: <html>maintenance</html>"):
        _catalog(handler).search_tracks("jazz")


@pytest.mark.parametrize("body", [
    {"text": "<html>maintenance</html>"},
    {"json": ["not", "an", "object"]},
])
def test_search_non_json_body_is_upstream_error(body):
    def handler(request):
        if request.url.host == "accounts.spotify.com":
            return httpx.Response(200, json={"access_token": "tok"})
        return httpx.Response(200, **body)

    with pytest.raises(UpstreamError, match="Spotify search error"):
        _catalog(handler).search_tracks("jazz")
