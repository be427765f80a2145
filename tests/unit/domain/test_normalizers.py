"""Unit tests for profile field normalizers."""

import pytest

from core.exceptions import ValidationFailure
from domain.normalizers import (
    MAX_URL_LENGTH,
    normalize_skills,
    normalize_social,
    normalize_url,
)


class TestNormalizeUrl:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_stays_empty(self, value):
        assert normalize_url(value) == ""

    def test_adds_https_to_bare_host(self):
        assert normalize_url("example.com") == "https://example.com"

    def test_upgrades_http(self):
        assert normalize_url("http://example.com/about") == "https://example.com/about"

    def test_protocol_relative(self):
        assert normalize_url("//example.com/x") == "https://example.com/x"

    def test_strips_www(self):
        assert normalize_url("https://www.twitter.com/ada") == "https://twitter.com/ada"

    def test_keeps_www_when_it_is_the_whole_domain(self):
        assert normalize_url("www.com") == "https://www.com"

    def test_lowercases_host_and_drops_default_port(self):
        assert normalize_url("HTTP://Example.COM:80/Path") == "https://example.com/Path"

    def test_keeps_port_80_on_https(self):
        assert normalize_url("https://example.com:80/x") == "https://example.com:80/x"

    def test_drops_443_for_either_scheme(self):
        assert normalize_url("http://example.com:443") == "https://example.com"
        assert normalize_url("https://example.com:443/a") == "https://example.com/a"

    def test_keeps_custom_port(self):
        assert normalize_url("example.com:8080") == "https://example.com:8080"

    def test_collapses_slashes_and_strips_trailing_slash(self):
        assert normalize_url("example.com//a//b/") == "https://example.com/a/b"

    def test_sorts_query_keeps_fragment(self):
        assert normalize_url("example.com/?b=2&a=1#top") == "https://example.com?a=1&b=2#top"

    @pytest.mark.parametrize(
        "value",
        [
            "example.com",
            "http://www.example.com:443//docs/?z=1&a=2",
            "https://www.www.example.com/",
            "youtube.com/c/ada#videos",
            "https://example.com:80/x",
            "example.com/?q=100%",
        ],
    )
    def test_idempotent(self, value):
        once = normalize_url(value)
        assert normalize_url(once) == once

    @pytest.mark.parametrize(
        "value",
        ["ftp://example.com", "javascript:alert(1)//", "https://exa mple.com", "http://:80", "a..b.com"],
    )
    def test_rejects_malformed(self, value):
        with pytest.raises(ValidationFailure) as exc_info:
            normalize_url(value, field="twitter")

        assert exc_info.value.errors[0]["field"] == "twitter"
        assert exc_info.value.status_code == 400

    def test_rejects_bad_port(self):
        with pytest.raises(ValidationFailure):
            normalize_url("example.com:99999")


class TestNormalizeSkills:
    def test_splits_and_trims_string(self):
        assert normalize_skills("python, sql ,  go") == ["python", "sql", "go"]

    def test_drops_empty_items(self):
        assert normalize_skills("python,, ,sql,") == ["python", "sql"]

    def test_accepts_list(self):
        assert normalize_skills([" rust ", "", "c"]) == ["rust", "c"]

    def test_none_is_empty(self):
        assert normalize_skills(None) == []


class TestNormalizeSocial:
    def test_fills_every_network(self):
        result = normalize_social({"twitter": "twitter.com/ada", "myspace": "x.com"})

        assert result == {
            "youtube": "",
            "twitter": "https://twitter.com/ada",
            "instagram": "",
            "linkedin": "",
            "facebook": "",
        }

    def test_none_gives_blank_links(self):
        assert set(normalize_social(None).values()) == {""}


class TestNormalizeUrlHostAfterWwwStrip:
    @pytest.mark.parametrize(
        "value", ["https://www.-evil.com/path", "www.-x.com", "www..com", "www.example..com"]
    )
    def test_rejects_host_left_invalid_by_www_strip(self, value):
        with pytest.raises(ValidationFailure) as exc_info:
            normalize_url(value)

        assert exc_info.value.errors[0]["message"] == "Please include a valid URL"


class TestNormalizeUrlLength:
    def test_accepts_url_at_limit(self):
        path = "a" * (MAX_URL_LENGTH - len("https://example.com/"))

        assert len(normalize_url(f"example.com/{path}")) == MAX_URL_LENGTH

    def test_rejects_url_that_grows_past_limit(self):
        # Fits before normalization; the scheme and query escaping push it over.
        value = "example.com/?q=" + "%" * (MAX_URL_LENGTH - 20)

        with pytest.raises(ValidationFailure) as exc_info:
            normalize_url(value, field="linkedin")

        assert exc_info.value.errors[0]["field"] == "linkedin"
        assert "2048" in exc_info.value.errors[0]["message"]
