"""Tests for petrel.dispatch.negotiation — return value to Response."""

import pytest

from petrel.dispatch import negotiate
from petrel.http.response import Response


class TestNegotiate:
    def test_response_passthrough(self) -> None:
        response = Response("x", status=202)
        assert negotiate(response) is response

    def test_str(self) -> None:
        response = negotiate("hello")
        assert response.content_type.startswith("text/plain")
        assert response.text == "hello"

    def test_bytes(self) -> None:
        assert negotiate(b"\x00").content_type == "application/octet-stream"

    def test_dict_and_list(self) -> None:
        assert negotiate({"a": 1}).json() == {"a": 1}
        assert negotiate([1, 2]).content_type == "application/json"

    def test_tuple_status(self) -> None:
        response = negotiate(("created", 201))
        assert (response.status, response.text) == (201, "created")

    def test_unsupported(self) -> None:
        with pytest.raises(TypeError, match="NoneType"):
            negotiate(None)
        with pytest.raises(TypeError):
            negotiate(42)
