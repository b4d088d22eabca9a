"""
Tests for URL validation and input sanitizing.
"""

import pytest

from shortener.core.validators import (
    EMPTY_URL,
    INVALID_SHORT_URL,
    INVALID_URL,
    URL_ALREADY_SHORTENED,
    URL_TOO_LARGE,
    sanitize_input,
    validate_original_url,
    validate_short_url,
)


class TestOriginalUrlValidation:
    """Test validation of long URLs before shortening."""

    @pytest.mark.parametrize("url", [
        "https://www.adroit-tt.com",
        "https://adroit-tt.com",
        "http://example.com",
        "https://example.com",
        "http://www.example.com",
        "https://www.example.com/",
        "https://www.example.com/tinyurl",
        "http://subdomain.example.com:8080/path?query=value",
    ])
    def test_valid_urls(self, url):
        assert validate_original_url(url) is None, f"Should be valid: {url}"

    @pytest.mark.parametrize("url", ["", "   ", None])
    def test_empty_urls(self, url):
        assert validate_original_url(url) == EMPTY_URL

    @pytest.mark.parametrize("url", ["foo", "example.com", "http://", "https://exa mple.com"])
    def test_invalid_urls(self, url):
        assert validate_original_url(url) == INVALID_URL, f"Should be invalid: {url}"

    def test_unencodable_url(self):
        """Lone surrogates (undecodable console bytes) are rejected."""
        assert validate_original_url("https://a.com/\ud800") == INVALID_URL
        assert validate_short_url("https://tinyurl.com/\udcff") == INVALID_URL

    def test_too_large(self):
        url = "https://example.com/" + "a" * 100
        assert validate_original_url(url, max_length=50) == URL_TOO_LARGE

    @pytest.mark.parametrize("url", [
        "https://tinyurl.com/abcd1234",
        "HTTPS://TINYURL.COM/abcd1234",
        "http://tinyurl.com/",
    ])
    def test_already_shortened(self, url):
        """URLs on the shortener's own domain are refused."""
        assert validate_original_url(url) == URL_ALREADY_SHORTENED

    def test_custom_base_domain(self):
        url = "https://sho.rt/abcd1234"
        assert validate_original_url(url) is None
        assert validate_original_url(url, base_url="https://sho.rt/", base_domain="sho.rt") == URL_ALREADY_SHORTENED


class TestShortUrlValidation:
    """Test validation of short URLs."""

    @pytest.mark.parametrize("url", [
        "https://tinyurl.com/example",
        "https://tinyurl.com/abcd1234",
    ])
    def test_valid_short_urls(self, url):
        assert validate_short_url(url) is None

    def test_empty(self):
        assert validate_short_url("") == EMPTY_URL

    def test_invalid(self):
        assert validate_short_url("not a url") == INVALID_URL

    @pytest.mark.parametrize("url", ["https://example.com", "https://example.com/tinyurl"])
    def test_not_shortened(self, url):
        assert validate_short_url(url) == INVALID_SHORT_URL


class TestSanitizeInput:
    """Test user input trimming."""

    def test_trims_whitespace(self):
        assert sanitize_input("  https://example.com \n") == "https://example.com"

    @pytest.mark.parametrize("text", [None, "", "   ", "\n"])
    def test_empty_input(self, text):
        assert sanitize_input(text) is None
