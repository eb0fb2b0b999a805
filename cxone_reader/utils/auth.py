import sys
from datetime import datetime, timedelta, timezone

import requests

from cxone_reader.utils.exceptions import InvalidCredential, InvalidToken
from cxone_reader.utils.token_codec import decode_token, expiry_from_claims, issuer_from_claims

ACCEPT_HEADER = 'application/json; version=1.0'
CLIENT_ID = 'ast-app'


class CxOneSession:
    def __init__(self, api_key=None, iam_uri=None, tenant=None, renewal_margin_minutes=5,
                 request_timeout=None, debug=False, debug_logger=None):
        """Initialize an unauthenticated session.

        Use ``CxOneSession.login`` to obtain a ready-to-use session.

        Args:
            api_key (str): The API key (refresh token)
            iam_uri (str): Identity provider root, e.g. https://iam.checkmarx.net
            tenant (str): The tenant name
            renewal_margin_minutes (int): Renew this many minutes before expiry
            request_timeout (float, optional): Timeout for the token request
            debug (bool, optional): Enable debug output. Defaults to False.
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.api_key = api_key
        self.iam_uri = iam_uri
        self.tenant = tenant
        self.renewal_margin = timedelta(minutes=renewal_margin_minutes)
        self.request_timeout = request_timeout
        self.debug = debug
        self.logger = debug_logger
        self.base_uri = None
        self.auth_header = {}
        self.expiry = None

    @classmethod
    def login(cls, api_key, **kwargs):
        """Create a session by exchanging an API key for an access token.

        Args:
            api_key (str): The API key
            **kwargs: Extra arguments forwarded to the constructor

        Returns:
            CxOneSession: Authenticated session

        Raises:
            InvalidCredential: If the key is malformed or the exchange fails
        """
        try:
            iam_uri, tenant = issuer_from_claims(decode_token(api_key))
        except InvalidToken as e:
            raise InvalidCredential(f"API key is invalid: {e}") from e

        session = cls(api_key=api_key, iam_uri=iam_uri, tenant=tenant, **kwargs)
        session._log(f"Logging in to tenant {tenant} via {iam_uri}")
        session._authenticate()
        return session

    def _log(self, message):
        if self.logger:
            self.logger.log(message)
        if self.debug:
            print(message)

    def _token_url(self, iam_uri, tenant):
        """Generate the token endpoint URL."""
        return f"{iam_uri.rstrip('/')}/auth/realms/{tenant}/protocol/openid-connect/token"

    def _exchange(self, iam_uri, tenant, api_key):
        """Exchange the API key for an access token.

        Updates ``auth_header`` on success. Never raises on HTTP failure.

        Returns:
            str: The raw access token, or None if the exchange failed
        """
        headers = {'Content-Type': 'application/x-www-form-urlencoded'}
        data = {
            'grant_type': 'refresh_token',
            'client_id': CLIENT_ID,
            'refresh_token': api_key
        }

        try:
            response = requests.post(
                self._token_url(iam_uri, tenant),
                headers=headers,
                data=data,
                timeout=self.request_timeout
            )
            response.raise_for_status()
            access_token = response.json().get('access_token')
        except requests.exceptions.RequestException as e:
            self._log(f"Authentication error: {e}")
            return None
        except (ValueError, AttributeError) as e:
            self._log(f"Authentication error: malformed token response ({e})")
            return None

        if not isinstance(access_token, str) or not access_token:
            self._log("Authentication error: no access token in response")
            return None

        self.auth_header = {
            'accept': ACCEPT_HEADER,
            'Authorization': f'Bearer {access_token}'
        }
        return access_token

    def _authenticate(self):
        """Run the exchange and refresh base URI and expiry from the new token.

        Raises:
            InvalidCredential: If the exchange fails or the token is unusable
        """
        access_token = self._exchange(self.iam_uri, self.tenant, self.api_key)
        if access_token is None:
            raise InvalidCredential("Could not exchange API key for an access token")

        try:
            claims = decode_token(access_token)
            self.expiry = expiry_from_claims(claims)
        except InvalidToken as e:
            self.auth_header = {}
            raise InvalidCredential(f"Access token is invalid: {e}") from e

        base_uri = claims.get('ast-base-url')
        if isinstance(base_uri, str) and base_uri:
            self.base_uri = base_uri.rstrip('/')
        elif self.base_uri is None:
            self.auth_header = {}
            raise InvalidCredential("Access token does not name a service base URL")

        self._log(f"Access token valid until {self.expiry.isoformat()}")

    def needs_renewal(self, now=None):
        """Check whether the access token is expired or about to expire."""
        if self.expiry is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now >= self.expiry - self.renewal_margin

    def ensure_valid(self):
        """Renew the access token if it expires within the renewal margin.

        Raises:
            InvalidCredential: If renewal fails
        """
        if not self.api_key or not self.iam_uri:
            print("Session error: no API key or identity provider set, call CxOneSession.login first")
            if self.logger:
                self.logger.log("FATAL: ensure_valid called on a session without credentials")
            sys.exit(1)

        if self.needs_renewal():
            self._log("Access token expiring, renewing...")
            self._authenticate()

    def get_headers(self):
        """Get headers with a fresh authentication token for API requests."""
        self.ensure_valid()
        return dict(self.auth_header)
