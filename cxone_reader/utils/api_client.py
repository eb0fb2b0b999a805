"""API client with offset/limit pagination."""

import requests

from cxone_reader.utils.exceptions import TransportFailure


class APIClient:
    """HTTP client for the CxOne API.

    Every request asks the session for headers first, so the access token is
    renewed before it expires, even in the middle of a long pagination loop.
    Failed requests are not retried.
    """

    def __init__(self, session, config, debug=False, debug_logger=None):
        """Initialize the API client.

        Args:
            session (CxOneSession): Authenticated session
            config (Config): Configuration instance
            debug (bool): Enable debug output
            debug_logger (DebugLogger, optional): Debug logger instance
        """
        self.session = session
        self.config = config
        self.debug = debug
        self.logger = debug_logger

    def _log(self, message):
        if self.logger:
            self.logger.log(message)
        if self.debug:
            print(message)

    def get_paginated(self, endpoint, items_key, total_key, page_size, params=None, mapper=None):
        """Fetch all items from an endpoint that reports a total count.

        The total is read from the first page only. Pages are requested at
        offsets 0, page_size, 2 * page_size, ... until the offset reaches it.

        Args:
            endpoint (str): API endpoint path
            items_key (str): Envelope key holding the page's items
            total_key (str): Envelope key holding the stop bound
            page_size (int): Number of items requested per page
            params (list, optional): Filter query parameters as (name, value) pairs
            mapper (callable, optional): Converts one raw item into a record

        Returns:
            list: All mapped items
        """
        all_items = []
        offset = 0
        total = 0
        filters = list(params or [])

        while True:
            page_params = [('offset', offset), ('limit', page_size)] + filters

            self._log(f"  Fetching {endpoint} (offset={offset}, limit={page_size})...")
            response_data = self.get(endpoint, params=page_params)

            if not isinstance(response_data, dict):
                raise TransportFailure(endpoint, "response is not a JSON object")

            if offset == 0:
                total = response_data.get(total_key)
                if isinstance(total, bool) or not isinstance(total, int):
                    total = 0
                self._log(f"    {total_key}: {total}")

            items = response_data.get(items_key) or []
            if not isinstance(items, list):
                raise TransportFailure(endpoint, f"'{items_key}' is not a list")
            for item in items:
                all_items.append(mapper(item) if mapper else item)

            self._log(f"    Retrieved {len(items)} items (total: {len(all_items)})")

            offset += page_size
            if offset >= total:
                break

        return all_items

    def get(self, endpoint, params=None):
        """Make a single GET request.

        Args:
            endpoint (str): API endpoint path
            params (list or dict, optional): Query parameters

        Returns:
            dict, list or None: Decoded JSON body, None for an empty body

        Raises:
            TransportFailure: On network error, non-2xx status or malformed JSON
        """
        url = f"{self.session.base_uri}{endpoint}"
        headers = self.session.get_headers()

        try:
            response = requests.get(
                url,
                headers=headers,
                params=params,
                timeout=self.config.request_timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            self._log(f"    Request to {endpoint} failed: {e}")
            raise TransportFailure(endpoint, str(e)) from e

        if not response.content or not response.content.strip():
            return None

        try:
            return response.json()
        except ValueError as e:
            self._log(f"    Malformed response from {endpoint}: {e}")
            raise TransportFailure(endpoint, f"malformed JSON body: {e}") from e
