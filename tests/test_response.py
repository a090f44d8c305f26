"""Tests for wren.http.response."""

import pytest

from wren.http.response import Response


class TestWriting:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status == 200
        assert response.body_bytes == b""
        assert not response.finished

    def test_write_and_end(self) -> None:
        response = Response()
        response.write("hello ")
        response.end(b"world")
        assert response.text == "hello world"
        assert response.finished

    def test_write_after_end(self) -> None:
        response = Response()
        response.end()
        with pytest.raises(RuntimeError, match="after end"):
            response.write("late")

    def test_set_header_replaces_case_insensitively(self) -> None:
        response = Response()
        response.set_header("X-Trace", "1")
        response.set_header("x-trace", "2")
        assert response.headers == [("x-trace", "2")]
        assert response.get_header("X-TRACE") == "2"

    def test_write_head(self) -> None:
        response = Response()
        response.write_head(201, {"Location": "/users/1"})
        assert response.status == 201
        assert response.get_header("location") == "/users/1"

    def test_send_json_replaces_body(self) -> None:
        response = Response()
        response.write("partial")
        response.send_json({"id": 1}, status=201)
        assert response.status == 201
        assert response.json() == {"id": 1}
        assert response.content_type == "application/json"
        assert response.finished

    def test_send_text(self) -> None:
        response = Response()
        response.send_text("pong")
        assert response.text == "pong"
        assert response.content_type.startswith("text/plain")

    def test_reset(self) -> None:
        response = Response()
        response.send_json({"x": 1}, status=418)
        response.reset()
        assert (response.status, response.headers, response.body_bytes) == (200, [], b"")
        assert not response.finished


class TestConstruction:
    def test_str_body(self) -> None:
        assert Response("héllo").body_bytes == "héllo".encode()

    def test_repr(self) -> None:
        assert repr(Response(b"abc", status=404)) == "<Response 404 3 bytes>"
