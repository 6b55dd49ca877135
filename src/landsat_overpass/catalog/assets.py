"""Asset accessibility checks."""

from __future__ import annotations

import logging

import requests

logger = logging.getLogger(__name__)


class AssetAccessChecker:
    """Check that an asset URL can be fetched, using a HEAD request.

    When an auth token is configured it is sent as ``X-Auth-Token``
    (the header the USGS machine-to-machine API issues tokens for).
    """

    def __init__(self, auth_token: str = "", timeout: float = 10,
                 session: requests.Session | None = None):
        self.auth_token = auth_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def is_reachable(self, url: str) -> bool:
        """Check if the asset at url is reachable.

        Any request failure or a status outside 2xx/3xx counts as
        unreachable.
        """
        headers = {"X-Auth-Token": self.auth_token} if self.auth_token else {}
        try:
            response = self.session.head(
                url, headers=headers, timeout=self.timeout, allow_redirects=True
            )
        except requests.RequestException as e:
            logger.debug(f"HEAD {url} failed: {e}")
            return False

        if response.status_code >= 400:
            logger.debug(f"HEAD {url} returned {response.status_code}")
            return False
        return True
