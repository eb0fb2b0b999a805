import json
from datetime import datetime, timezone

import pytest

from cxone_reader.utils.exceptions import InvalidToken
from cxone_reader.utils.token_codec import (
    decode_token,
    expiry_from_claims,
    issuer_from_claims,
)
from tests.conftest import b64url, make_token


class TestDecodeToken:
    @pytest.mark.parametrize(
        "claims",
        [
            {"sub": "user"},
            {"aud": "https://iam.checkmarx.net/auth/realms/acme", "exp": 1700000000},
            {"nested": {"a": [1, 2, 3]}, "unicode": "Grüße", "flag": True},
            {"k": "x" * 17},
        ],
    )
    def test_round_trip(self, claims):
        assert decode_token(make_token(claims)) == claims

    def test_signature_segment_is_optional(self):
        claims = {"sub": "user"}
        assert decode_token(make_token(claims, signature=False)) == claims

    def test_url_safe_alphabet_is_translated(self):
        # '?>' encodes to characters outside the standard alphabet
        claims = {"v": "??>>??>>"}
        token = make_token(claims)
        assert "-" in token or "_" in token
        assert decode_token(token) == claims

    @pytest.mark.parametrize("token", ["", "abc", "eyJhbGciOiJIUzI1NiJ9", "abc.def", 42, None])
    def test_rejects_malformed_tokens(self, token):
        with pytest.raises(InvalidToken):
            decode_token(token)

    def test_rejects_payload_that_is_not_json(self):
        header = b64url(b'{"alg":"none"}')
        with pytest.raises(InvalidToken):
            decode_token(f"{header}.{b64url(b'not json')}")

    def test_rejects_payload_that_is_not_an_object(self):
        header = b64url(b'{"alg":"none"}')
        with pytest.raises(InvalidToken):
            decode_token(f"{header}.{b64url(b'[1, 2]')}")


class TestPadding:
    @pytest.mark.parametrize("size", range(1, 9))
    def test_unpadded_payloads_of_every_length_decode(self, size):
        claims = {"k": "x" * size}
        header = b64url(b'{"alg":"none"}')
        payload = b64url(json.dumps(claims).encode())
        assert decode_token(f"{header}.{payload}") == claims

    def test_payload_lengths_cover_every_remainder(self):
        lengths = {len(b64url(json.dumps({"k": "x" * size}).encode())) % 4 for size in range(1, 9)}
        assert lengths == {0, 2, 3}

    def test_signature_is_ignored(self):
        claims = {"sub": "user"}
        token = make_token(claims, signature=False) + ".not!base64"
        assert decode_token(token) == claims


class TestClaims:
    def test_issuer_from_audience(self):
        claims = {"aud": "https://eu.iam.checkmarx.net/auth/realms/acme-corp"}
        assert issuer_from_claims(claims) == ("https://eu.iam.checkmarx.net", "acme-corp")

    @pytest.mark.parametrize("aud", [None, 7, "https://iam.checkmarx.net", "not a url"])
    def test_issuer_requires_host_and_tenant(self, aud):
        with pytest.raises(InvalidToken):
            issuer_from_claims({"aud": aud})

    def test_expiry_is_utc(self):
        expiry = expiry_from_claims({"exp": 0})
        assert expiry == datetime(1970, 1, 1, tzinfo=timezone.utc)

    def test_expiry_required(self):
        with pytest.raises(InvalidToken):
            expiry_from_claims({"exp": "soon"})

    @pytest.mark.parametrize("exp", [1e20, -1e20, float("nan")])
    def test_expiry_out_of_range(self, exp):
        with pytest.raises(InvalidToken):
            expiry_from_claims({"exp": exp})
