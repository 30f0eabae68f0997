"""
Gifddo Gateway Exchange

Posts signed request fields to the gateway and returns the URL the payer
must be redirected to.

The gateway signals success with a Location header, so redirects are never
followed. There are no retries: one failed POST surfaces immediately.
"""

import logging
from typing import Mapping, Optional

import requests

from . import config
from .exceptions import ProtocolError, TransportError
from .keys import GatewayMode

logger = logging.getLogger(__name__)

LIVE_URL = "https://gifddo.com/api/giftlink"
TEST_URL = "https://gifddo.staging.elevate.ee/api/giftlink"

GATEWAY_URLS = {
    GatewayMode.LIVE: LIVE_URL,
    GatewayMode.TEST: TEST_URL,
}


class GatewayExchange:
    """
    Submits one request per payment attempt.

    The HTTP transport defaults to the module-level requests.post. A
    requests.Session (or anything with the same post() signature) may be
    passed instead, e.g. for connection reuse or a stub in tests.
    """

    def __init__(
        self,
        mode: GatewayMode = GatewayMode.LIVE,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None
    ):
        self.mode = GatewayMode(mode)
        self.session = session
        self.timeout = config.TIMEOUT if timeout is None else timeout

    @property
    def url(self) -> str:
        return GATEWAY_URLS[self.mode]

    def submit(self, fields: Mapping[str, str]) -> str:
        """
        POST the fields form-encoded and return the redirect target.

        Raises:
            TransportError: the request could not be completed
            ProtocolError: the gateway answered without a Location header
        """
        try:
            post = requests.post if self.session is None else self.session.post
            response = post(
                self.url,
                data=dict(fields),
                allow_redirects=False,
                timeout=self.timeout,
            )
        except (requests.RequestException, OSError) as e:
            logger.warning("Gateway request to %s failed: %s", self.url, e)
            raise TransportError(str(e), cause=e) from e

        location = response.headers.get("Location")
        if not location:
            raise ProtocolError(
                f"Gateway responded with HTTP {response.status_code} but no Location header",
                status_code=response.status_code,
            )

        logger.debug("Gateway redirect (HTTP %s) to %s", response.status_code, location)
        return location
