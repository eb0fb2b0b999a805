import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
import requests

from cxone_reader.utils.api_client import APIClient
from cxone_reader.utils.auth import CxOneSession
from cxone_reader.utils.config import Config

IAM_URI = "https://iam.checkmarx.net"
TENANT = "acme"
BASE_URI = "https://ast.checkmarx.net"


def b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def make_token(claims: dict, signature: bool = True) -> str:
    header = b64url(json.dumps({"alg": "RS256", "typ": "JWT"}).encode())
    payload = b64url(json.dumps(claims).encode())
    token = f"{header}.{payload}"
    return f"{token}.c2lnbmF0dXJl" if signature else token


def make_api_key(tenant: str = TENANT) -> str:
    return make_token({"aud": f"{IAM_URI}/auth/realms/{tenant}", "typ": "Offline"})


def make_access_token(minutes: int = 30, base_uri: str = BASE_URI) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return make_token({"exp": int(exp.timestamp()), "ast-base-url": base_uri})


class FakeResponse:
    def __init__(self, payload=None, status_code=200, raw=None):
        self.status_code = status_code
        if raw is not None:
            self.content = raw
        elif payload is None:
            self.content = b""
        else:
            self.content = json.dumps(payload).encode()

    def json(self):
        return json.loads(self.content)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def session() -> CxOneSession:
    session = CxOneSession(api_key=make_api_key(), iam_uri=IAM_URI, tenant=TENANT)
    session.base_uri = BASE_URI
    session.auth_header = {
        "accept": "application/json; version=1.0",
        "Authorization": "Bearer test-token",
    }
    session.expiry = datetime.now(timezone.utc) + timedelta(hours=1)
    return session


@pytest.fixture
def api_client(session: CxOneSession, config: Config) -> APIClient:
    return APIClient(session, config)
