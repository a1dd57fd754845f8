"""
Tests for the Zoom account-credentials token exchange.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from zoom_gateway.src.config import Config
from zoom_gateway.src.errors import ProviderError
from zoom_gateway.src.services.client_credentials import Credential
from zoom_gateway.src.services.zoom_auth import ZoomAccountCredentials

POST = "zoom_gateway.src.services.zoom_auth.requests.post"


@pytest.fixture
def auth():
    return ZoomAccountCredentials(
        account_id="acct",
        client_id="client",
        client_secret="s3cret",
        token_url="https://zoom.example/oauth/token",
        timeout=7,
        clock=lambda: 1000.0,
    )


def _response(payload=None, status=200):
    resp = MagicMock()
    resp.status_code = status
    resp.json.return_value = payload
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(response=resp)
    return resp


class TestAcquire:

    def test_parses_token_and_absolute_expiry(self, auth):
        payload = {"access_token": "T1", "token_type": "bearer", "expires_in": 3600, "scope": "meeting:read"}
        with patch(POST, return_value=_response(payload)) as post:
            credential = auth.acquire()

        assert credential.access_token == "T1"
        assert credential.expires_at == 4600.0
        assert credential.scope == "meeting:read"
        post.assert_called_once_with(
            "https://zoom.example/oauth/token",
            params={"grant_type": "account_credentials", "account_id": "acct"},
            auth=("client", "s3cret"),
            timeout=7,
        )

    def test_timeout_is_provider_error(self, auth):
        with patch(POST, side_effect=requests.Timeout("read timed out")):
            with pytest.raises(ProviderError, match="timed out"):
                auth.acquire()

    def test_connection_error_is_provider_error(self, auth):
        with patch(POST, side_effect=requests.ConnectionError("refused")):
            with pytest.raises(ProviderError):
                auth.acquire()

    def test_non_success_status_is_provider_error(self, auth):
        with patch(POST, return_value=_response({"reason": "Invalid client"}, status=401)):
            with pytest.raises(ProviderError, match="401"):
                auth.acquire()

    def test_unparsable_body_is_provider_error(self, auth):
        resp = _response()
        resp.json.side_effect = ValueError("Expecting value")
        with patch(POST, return_value=resp):
            with pytest.raises(ProviderError, match="Unparsable"):
                auth.acquire()

    def test_non_object_body_is_provider_error(self, auth):
        with patch(POST, return_value=_response(["T1"])):
            with pytest.raises(ProviderError):
                auth.acquire()

    def test_missing_token_is_provider_error(self, auth):
        with patch(POST, return_value=_response({"expires_in": 3600})):
            with pytest.raises(ProviderError, match="access token"):
                auth.acquire()

    def test_secret_not_in_error_or_repr(self, auth):
        with patch(POST, side_effect=requests.ConnectionError("refused")):
            with pytest.raises(ProviderError) as excinfo:
                auth.acquire()
        assert "s3cret" not in str(excinfo.value)
        assert "s3cret" not in repr(auth)


def test_missing_account_id_fails_at_construction(monkeypatch):
    monkeypatch.setattr(Config, "ZOOM_ACCOUNT_ID", None)
    monkeypatch.delenv("ZOOM_ACCOUNT_ID", raising=False)
    with pytest.raises(RuntimeError, match="ZOOM_ACCOUNT_ID"):
        ZoomAccountCredentials(client_id="client", client_secret="s3cret")


def test_missing_secret_fails_at_construction(monkeypatch):
    monkeypatch.setattr(Config, "ZOOM_CLIENT_SECRET", None)
    monkeypatch.delenv("ZOOM_CLIENT_SECRET", raising=False)
    with pytest.raises(RuntimeError, match="client_secret"):
        ZoomAccountCredentials(account_id="acct", client_id="client")


class TestCredential:

    def test_validity_honours_margin(self):
        credential = Credential(access_token="T1", expires_at=1100.0)
        assert credential.is_valid(now=1000.0)
        assert not credential.is_valid(now=1000.0, margin=100)
        assert not credential.is_valid(now=1100.0)

    def test_ttl_never_below_one_second(self):
        credential = Credential(access_token="T1", expires_at=1030.0)
        assert credential.ttl(now=1000.0) == 30
        assert credential.ttl(now=1000.0, margin=60) == 1

    def test_repr_hides_token(self):
        assert "T1-secret" not in repr(Credential(access_token="T1-secret", expires_at=1.0))

    def test_stored_entry_round_trip(self):
        credential = Credential(access_token="T1", expires_at=4600.0, scope="meeting:read")
        assert Credential.loads(credential.dumps()) == credential

    @pytest.mark.parametrize("raw", ["T1", "{}", "[]", '{"access_token": "T1", "expires_at": "soon"}'])
    def test_unreadable_entries_load_as_none(self, raw):
        assert Credential.loads(raw) is None

    def test_bearer_header(self):
        headers = Credential(access_token="T1", expires_at=1.0).headers()
        assert headers["Authorization"] == "Bearer T1"
