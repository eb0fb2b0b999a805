from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
import requests

from cxone_reader.utils.auth import CxOneSession
from cxone_reader.utils.exceptions import InvalidCredential
from tests.conftest import (
    BASE_URI,
    IAM_URI,
    TENANT,
    FakeResponse,
    make_access_token,
    make_api_key,
    make_token,
)

TOKEN_URL = f"{IAM_URI}/auth/realms/{TENANT}/protocol/openid-connect/token"


class TestLogin:
    def test_login_exchanges_api_key(self):
        api_key = make_api_key()
        access_token = make_access_token(minutes=30)

        with patch("cxone_reader.utils.auth.requests.post",
                   return_value=FakeResponse({"access_token": access_token})) as mock_post:
            session = CxOneSession.login(api_key)

        args, kwargs = mock_post.call_args
        assert args[0] == TOKEN_URL
        assert kwargs["data"] == {
            "grant_type": "refresh_token",
            "client_id": "ast-app",
            "refresh_token": api_key,
        }
        assert session.iam_uri == IAM_URI
        assert session.tenant == TENANT
        assert session.base_uri == BASE_URI
        assert session.auth_header == {
            "accept": "application/json; version=1.0",
            "Authorization": f"Bearer {access_token}",
        }
        assert session.expiry > datetime.now(timezone.utc) + timedelta(minutes=29)

    def test_malformed_api_key(self):
        with patch("cxone_reader.utils.auth.requests.post") as mock_post:
            with pytest.raises(InvalidCredential):
                CxOneSession.login("not-a-key")
        mock_post.assert_not_called()

    def test_api_key_without_audience(self):
        with pytest.raises(InvalidCredential):
            CxOneSession.login(make_token({"sub": "someone"}))

    def test_rejected_exchange(self):
        with patch("cxone_reader.utils.auth.requests.post",
                   return_value=FakeResponse({"error": "invalid_grant"}, status_code=400)):
            with pytest.raises(InvalidCredential):
                CxOneSession.login(make_api_key())

    def test_network_failure(self):
        with patch("cxone_reader.utils.auth.requests.post",
                   side_effect=requests.exceptions.ConnectionError("unreachable")):
            with pytest.raises(InvalidCredential):
                CxOneSession.login(make_api_key())

    def test_access_token_without_base_url(self):
        exp = int((datetime.now(timezone.utc) + timedelta(minutes=30)).timestamp())
        with patch("cxone_reader.utils.auth.requests.post",
                   return_value=FakeResponse({"access_token": make_token({"exp": exp})})):
            with pytest.raises(InvalidCredential):
                CxOneSession.login(make_api_key())


class TestExchange:
    def test_returns_none_on_failure(self, session):
        with patch("cxone_reader.utils.auth.requests.post",
                   side_effect=requests.exceptions.Timeout("slow")):
            assert session._exchange(IAM_URI, TENANT, session.api_key) is None

    def test_returns_none_without_token(self, session):
        with patch("cxone_reader.utils.auth.requests.post", return_value=FakeResponse({})):
            assert session._exchange(IAM_URI, TENANT, session.api_key) is None

    def test_returns_none_on_malformed_body(self, session):
        with patch("cxone_reader.utils.auth.requests.post",
                   return_value=FakeResponse(raw=b"<html>")):
            assert session._exchange(IAM_URI, TENANT, session.api_key) is None


class TestRenewal:
    def test_renews_within_five_minutes_of_expiry(self, session):
        session.expiry = datetime.now(timezone.utc) + timedelta(minutes=4)
        with patch.object(session, "_exchange", return_value=make_access_token(minutes=30)) as mock_exchange:
            session.ensure_valid()
        mock_exchange.assert_called_once_with(IAM_URI, TENANT, session.api_key)
        assert session.expiry > datetime.now(timezone.utc) + timedelta(minutes=29)

    def test_keeps_token_outside_margin(self, session):
        session.expiry = datetime.now(timezone.utc) + timedelta(minutes=6)
        with patch.object(session, "_exchange") as mock_exchange:
            session.ensure_valid()
        mock_exchange.assert_not_called()

    def test_renewal_keeps_tenant(self, session):
        session.expiry = datetime.now(timezone.utc) - timedelta(minutes=1)
        with patch("cxone_reader.utils.auth.requests.post",
                   return_value=FakeResponse({"access_token": make_access_token()})) as mock_post:
            session.ensure_valid()
        assert mock_post.call_args[0][0] == TOKEN_URL

    def test_renewal_failure_is_raised(self, session):
        session.expiry = datetime.now(timezone.utc) - timedelta(minutes=1)
        with patch.object(session, "_exchange", return_value=None):
            with pytest.raises(InvalidCredential):
                session.ensure_valid()

    def test_missing_credentials_terminate(self):
        session = CxOneSession()
        with pytest.raises(SystemExit):
            session.ensure_valid()

    def test_get_headers_validates_first(self, session):
        with patch.object(session, "ensure_valid") as mock_ensure:
            headers = session.get_headers()
        mock_ensure.assert_called_once()
        assert headers == session.auth_header
        headers["Authorization"] = "changed"
        assert session.auth_header["Authorization"] == "Bearer test-token"
