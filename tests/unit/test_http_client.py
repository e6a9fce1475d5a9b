"""
Unit tests for ghasset.core.http.client module.
"""

from unittest.mock import MagicMock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from ghasset.core.errors import TransferError
from ghasset.core.http import TransferClient, TransferResponse


def _response(
    status_code=200,
    chunks=(b"hello ", b"world"),
    headers=None,
    url="https://github.com/user-attachments/assets/x",
    reason="OK",
):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.url = url
    response.headers = CaseInsensitiveDict(headers or {})
    response.iter_content.return_value = iter(chunks)
    return response


@pytest.fixture
def session():
    session = MagicMock(spec=requests.Session)
    session.headers = {}
    return session


class TestTransferClient:
    """Tests for TransferClient.get."""

    def test_returns_body_and_headers(self, session):
        """Test that the streamed body and final headers are returned."""
        session.get.return_value = _response(
            headers={"Content-Type": "image/png", "Content-Length": "11"},
            url="https://objects.githubusercontent.com/signed/file.png?sig=1",
        )
        client = TransferClient(session=session)

        response = client.get("https://github.com/user-attachments/assets/x", "tok")

        assert isinstance(response, TransferResponse)
        assert response.body == b"hello world"
        assert response.content_type == "image/png"
        assert response.url == "https://objects.githubusercontent.com/signed/file.png?sig=1"
        assert response.status_code == 200

    def test_sends_token_and_follows_redirects(self, session):
        """Test the request headers and redirect handling."""
        session.get.return_value = _response()
        client = TransferClient(timeout=42, session=session)

        client.get("https://github.com/user-attachments/assets/x", "secret-token")

        kwargs = session.get.call_args.kwargs
        assert kwargs["headers"] == {"Authorization": "token secret-token"}
        assert kwargs["allow_redirects"] is True
        assert kwargs["timeout"] == 42
        assert kwargs["stream"] is True

    def test_sets_user_agent(self, session):
        """Test that the session carries the configured User-Agent."""
        TransferClient(user_agent="gh-asset/test", session=session)

        assert session.headers["User-Agent"] == "gh-asset/test"

    def test_reports_progress(self, session):
        """Test that the callback receives cumulative byte counts."""
        session.get.return_value = _response(headers={"Content-Length": "11"})
        client = TransferClient(session=session)
        updates = []

        client.get("https://example.com/a", "tok", progress_callback=lambda d, t: updates.append((d, t)))

        assert updates == [(6, 11), (11, 11)]

    def test_unknown_length_reports_zero_total(self, session):
        """Test progress without a Content-Length header."""
        session.get.return_value = _response(chunks=(b"abc",))
        client = TransferClient(session=session)
        updates = []

        client.get("https://example.com/a", "tok", progress_callback=lambda d, t: updates.append((d, t)))

        assert updates == [(3, 0)]

    @pytest.mark.parametrize("length", ["abc", "12, 12", "-5"])
    def test_malformed_length_is_treated_as_unknown(self, session, length):
        """Test that a bad Content-Length header does not abort the download."""
        session.get.return_value = _response(chunks=(b"abc",), headers={"Content-Length": length})
        client = TransferClient(session=session)
        updates = []

        response = client.get("https://example.com/a", "tok", progress_callback=lambda d, t: updates.append((d, t)))

        assert response.body == b"abc"
        assert updates == [(3, 0)]

    def test_not_found(self, session):
        """Test that a 404 becomes TransferError and the body is not read."""
        response = _response(status_code=404, reason="Not Found")
        session.get.return_value = response
        client = TransferClient(session=session)

        with pytest.raises(TransferError) as exc_info:
            client.get("https://example.com/a", "tok")

        assert exc_info.value.status_code == 404
        assert "404 - Not Found" in exc_info.value.message
        response.iter_content.assert_not_called()
        response.close.assert_called_once()

    def test_connection_error(self, session):
        """Test that network failures become TransferError."""
        session.get.side_effect = requests.ConnectionError("connection refused")
        client = TransferClient(session=session)

        with pytest.raises(TransferError, match="connection refused"):
            client.get("https://example.com/a", "tok")

    def test_too_many_redirects(self, session):
        """Test that redirect loops become TransferError."""
        session.get.side_effect = requests.TooManyRedirects("Exceeded 30 redirects.")
        client = TransferClient(session=session)

        with pytest.raises(TransferError, match="redirects"):
            client.get("https://example.com/a", "tok")

    def test_body_read_failure(self, session):
        """Test that errors while streaming become TransferError."""
        response = _response()
        response.iter_content.side_effect = requests.exceptions.ChunkedEncodingError("broken")
        session.get.return_value = response
        client = TransferClient(session=session)

        with pytest.raises(TransferError, match="Failed to read response body"):
            client.get("https://example.com/a", "tok")

    def test_context_manager_closes_session(self, session):
        """Test that leaving the context closes the session."""
        with TransferClient(session=session):
            pass

        session.close.assert_called_once()
