"""Tests for transport module."""

from unittest.mock import Mock

import pytest
import requests

from crpt_api.errors import TransportError
from crpt_api.transport import RequestsTransport, Response


class TestResponse:
    """Test the Response value type."""

    def test_headers_are_copied(self):
        """Test that mutating the source mapping does not change the response."""
        headers = {"X-Id": "1"}
        response = Response(200, b"{}", headers)
        headers["X-Id"] = "2"
        assert response.headers == {"X-Id": "1"}

    def test_text_and_json(self):
        """Test decoding helpers."""
        response = Response(409, b'{"error":"duplicate"}')
        assert response.text == '{"error":"duplicate"}'
        assert response.json() == {"error": "duplicate"}
        assert response.ok is False


class TestRequestsTransport:
    """Test RequestsTransport against a local HTTP server."""

    def test_post_sends_body_and_headers(self, http_server):
        """Test that POST forwards the payload, headers and JSON content type."""
        url, handler = http_server
        handler.responses.append((201, {"X-Request-Id": "abc"}, b'{"value":"ok"}'))

        with RequestsTransport(timeout=5) as transport:
            response = transport.post(f"{url}/create", b'{"doc_id":"1"}', {"Signature": "sig"})

        assert response.status_code == 201
        assert response.body == b'{"value":"ok"}'
        assert response.headers["X-Request-Id"] == "abc"
        request = handler.requests[0]
        assert request["method"] == "POST"
        assert request["path"] == "/create"
        assert request["body"] == b'{"doc_id":"1"}'
        assert request["headers"]["Signature"] == "sig"
        assert request["headers"]["Content-Type"] == "application/json"

    def test_error_status_is_returned(self, http_server):
        """Test that a 4xx answer is returned, not raised."""
        url, handler = http_server
        handler.responses.append((409, {}, b'{"error":"duplicate"}'))

        with RequestsTransport(timeout=5) as transport:
            response = transport.post(url, b"{}", {})

        assert response.status_code == 409
        assert response.body == b'{"error":"duplicate"}'

    def test_server_error_not_retried(self, http_server):
        """Test that a 5xx answer is returned after a single request."""
        url, handler = http_server
        handler.responses.extend([(503, {}, b""), (200, {}, b"{}")])

        with RequestsTransport(timeout=5) as transport:
            response = transport.post(url, b"{}", {})

        assert response.status_code == 503
        assert len(handler.requests) == 1

    def test_redirect_not_followed(self, http_server):
        """Test that a 302 answer is returned instead of being followed."""
        url, handler = http_server
        handler.responses.extend(
            [
                (302, {"Location": f"{url}/elsewhere"}, b""),
                (200, {}, b'{"from":"redirect target"}'),
            ]
        )

        with RequestsTransport(timeout=5) as transport:
            response = transport.post(f"{url}/create", b'{"doc_id":"1"}', {"Signature": "sig"})

        assert response.status_code == 302
        assert response.headers["Location"] == f"{url}/elsewhere"
        assert len(handler.requests) == 1
        assert handler.requests[0]["path"] == "/create"

    def test_get(self, http_server):
        """Test that GET forwards headers and returns the response."""
        url, handler = http_server
        handler.responses.append((200, {}, b"[]"))

        with RequestsTransport(timeout=5) as transport:
            response = transport.get(f"{url}/info", {"Authorization": "Bearer t"})

        assert response.status_code == 200
        assert handler.requests[0]["method"] == "GET"
        assert handler.requests[0]["headers"]["Authorization"] == "Bearer t"

    def test_connection_refused_raises_transport_error(self, closed_port):
        """Test that network failures surface as TransportError."""
        uri = f"http://127.0.0.1:{closed_port}/create"
        with RequestsTransport(timeout=5) as transport:
            with pytest.raises(TransportError) as excinfo:
                transport.post(uri, b"{}", {})
        assert excinfo.value.uri == uri
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)

    def test_closes_only_owned_session(self):
        """Test that a caller-supplied session is left open."""
        session = Mock(spec=requests.Session)
        RequestsTransport(session=session).close()
        session.close.assert_not_called()

    def test_closes_created_session(self, monkeypatch):
        """Test that a session created by the transport is closed with it."""
        session = Mock(spec=requests.Session)
        monkeypatch.setattr("crpt_api.transport.create_session", lambda: session)
        RequestsTransport().close()
        session.close.assert_called_once()
