"""Tests for petrel.http.headers — immutable, case-insensitive headers."""

from petrel.http.headers import Headers


class TestHeaders:
    def test_case_insensitive_lookup(self) -> None:
        headers = Headers(((b"content-type", b"application/json"),))
        assert headers["Content-Type"] == "application/json"
        assert "CONTENT-TYPE" in headers

    def test_get_default(self) -> None:
        assert Headers().get("x-missing") is None
        assert Headers().get("x-missing", "fallback") == "fallback"

    def test_get_list(self) -> None:
        headers = Headers(((b"accept", b"text/html"), (b"Accept", b"application/json")))
        assert headers.get_list("accept") == ["text/html", "application/json"]
        assert headers["accept"] == "text/html"

    def test_iteration_dedupes(self) -> None:
        headers = Headers(((b"a", b"1"), (b"A", b"2"), (b"b", b"3")))
        assert list(headers) == ["a", "b"]
        assert len(headers) == 2

    def test_from_dict(self) -> None:
        headers = Headers.from_dict({"Origin": "https://example.com"})
        assert headers["origin"] == "https://example.com"
        assert headers.raw == ((b"origin", b"https://example.com"),)

    def test_from_empty_dict(self) -> None:
        assert len(Headers.from_dict(None)) == 0

    def test_non_string_key_not_contained(self) -> None:
        assert 1 not in Headers(((b"a", b"1"),))
