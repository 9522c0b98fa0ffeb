"""
HTTP Client Unit Tests
Tests for mmrproof/http/client.py
"""
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
import requests

from mmrproof.http.client import HttpClient, HttpError, HttpResponse, HttpTimeoutError


def _mock_session(status_code=200, content=b'{"ok": true}'):
    session = MagicMock()
    session.request.return_value = MagicMock(
        status_code=status_code,
        content=content,
        elapsed=timedelta(milliseconds=12),
    )
    return session


class TestHttpResponse:
    """Tests for HttpResponse helpers."""

    def test_ok_and_json(self):
        response = HttpResponse(status_code=200, content=b'{"a": 1}')

        assert response.ok
        assert response.json() == {"a": 1}
        assert response.text == '{"a": 1}'

    def test_not_ok(self):
        assert not HttpResponse(status_code=503, content=b"").ok


class TestHttpClient:
    """Tests for HttpClient request handling."""

    def test_post_json(self):
        session = _mock_session()
        client = HttpClient(timeout=7.0, default_headers={"X-Api-Key": "k"}, session=session)

        response = client.post("http://indexer.test/graphql", json={"query": "{}"})

        assert response.ok
        assert response.json() == {"ok": True}
        assert response.elapsed_ms == pytest.approx(12.0)

        kwargs = session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["json"] == {"query": "{}"}
        assert kwargs["timeout"] == 7.0
        assert kwargs["headers"]["X-Api-Key"] == "k"

    def test_per_request_timeout_and_headers(self):
        session = _mock_session()
        client = HttpClient(timeout=7.0, session=session)

        client.post("http://indexer.test", json={}, headers={"Accept": "text/plain"}, timeout=1.5)

        kwargs = session.request.call_args.kwargs
        assert kwargs["timeout"] == 1.5
        assert kwargs["headers"] == {"Accept": "text/plain"}

    @pytest.mark.parametrize("timeout", [0, 0.0])
    def test_zero_timeout_not_replaced_by_default(self, timeout):
        """An explicit zero is a timeout, not a request for the default."""
        session = _mock_session()
        client = HttpClient(timeout=7.0, session=session)

        client.post("http://indexer.test", json={}, timeout=timeout)

        assert session.request.call_args.kwargs["timeout"] == 0

    def test_timeout_maps_to_http_timeout_error(self):
        session = MagicMock()
        session.request.side_effect = requests.Timeout("read timed out")
        client = HttpClient(timeout=3.0, session=session)

        with pytest.raises(HttpTimeoutError) as exc_info:
            client.post("http://indexer.test", json={})

        assert exc_info.value.timeout == 3.0

    def test_connection_error_maps_to_http_error(self):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("refused")
        client = HttpClient(session=session)

        with pytest.raises(HttpError) as exc_info:
            client.post("http://indexer.test", json={})

        assert not isinstance(exc_info.value, HttpTimeoutError)

    def test_lazy_session_with_proxy(self):
        client = HttpClient(default_headers={"X-A": "1"}, proxy="http://proxy:3128")

        session = client._get_session()

        assert isinstance(session, requests.Session)
        assert session.proxies["https"] == "http://proxy:3128"
        assert session.headers["X-A"] == "1"
        client.close()
        assert client._session is None

    def test_context_manager_closes(self):
        session = _mock_session()

        with HttpClient(session=session) as client:
            client.post("http://indexer.test", json={})

        session.close.assert_called_once()
