"""Decoding of CxOne bearer tokens (API keys and access tokens)."""

from datetime import datetime, timezone
from urllib.parse import urlparse

import jwt

from cxone_reader.utils.exceptions import InvalidToken

# base64 of '{"', the start of every JSON header segment
TOKEN_PREFIX = "eyJ"


def decode_token(token):
    """Decode the claims of a header.payload[.signature] token.

    The signature is dropped and never verified; CxOne is trusted as issuer.

    Args:
        token (str): The token to decode

    Returns:
        dict: The payload claims

    Raises:
        InvalidToken: If the token is not shaped like a JWT or the payload
            is not a base64 encoded JSON object
    """
    if not isinstance(token, str):
        raise InvalidToken("Token must be a string")

    parts = token.strip().split('.')
    if len(parts) < 2 or not parts[0].startswith(TOKEN_PREFIX):
        raise InvalidToken("Token is not a valid bearer token")

    # Empty signature segment, so a two-segment API key decodes the same way
    unsigned = f"{parts[0]}.{parts[1]}."
    try:
        claims = jwt.decode(unsigned, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        raise InvalidToken(f"Token payload could not be decoded: {e}") from e

    if not isinstance(claims, dict):
        raise InvalidToken("Token payload is not a JSON object")
    return claims


def issuer_from_claims(claims):
    """Extract the identity provider URI and tenant from an API key's claims.

    The ``aud`` claim looks like ``https://iam.checkmarx.net/auth/realms/<tenant>``.

    Args:
        claims (dict): Decoded API key claims

    Returns:
        tuple: (iam_uri, tenant)

    Raises:
        InvalidToken: If ``aud`` is missing or does not name a host and tenant
    """
    audience = claims.get('aud')
    if isinstance(audience, list) and audience:
        audience = audience[0]
    if not isinstance(audience, str):
        raise InvalidToken("Token has no audience claim")

    parsed = urlparse(audience)
    segments = parsed.path.split('/')
    if not parsed.netloc or len(segments) < 4 or not segments[3]:
        raise InvalidToken(f"Unexpected audience claim: {audience}")

    scheme = parsed.scheme or 'https'
    return f"{scheme}://{parsed.netloc}", segments[3]


def expiry_from_claims(claims):
    """Convert the ``exp`` claim into an aware UTC datetime.

    Args:
        claims (dict): Decoded access token claims

    Returns:
        datetime: Expiry timestamp

    Raises:
        InvalidToken: If ``exp`` is missing, not numeric or out of range
    """
    exp = claims.get('exp')
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise InvalidToken("Token has no expiry claim")
    try:
        return datetime.fromtimestamp(exp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidToken(f"Token expiry {exp} is out of range") from e
