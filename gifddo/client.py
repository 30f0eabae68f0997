"""
Gifddo Client

Entry point for merchants: builds signed payment requests, submits them to
the gateway and verifies the signed responses the gateway sends back.

Usage:
    client = Client("MERCHANT", private_key_pem, test=True)
    url = client.request({
        "amount": "10.00",
        "reference": "1337",
        "email": "payer@example.com",
        "first_name": "John",
        "last_name": "Smith",
        "return_url": "https://shop.example.com/return",
    })
    # redirect the payer to url

    # later, on the return URL
    if client.verify(posted_fields):
        ...
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

import requests

from . import config, signing
from .exceptions import GifddoError
from .exchange import GatewayExchange
from .fields import MAC_FIELD, SERVICE_FIELD
from .keys import GatewayMode, KeyMaterial
from .logging_config import audit_log
from .request import RequestBuilder

logger = logging.getLogger(__name__)


class Client:
    """Gifddo bank-link client for one merchant."""

    def __init__(
        self,
        merchant_id: str,
        private_key: Union[str, bytes],
        test: bool = False,
        public_key: Optional[Union[str, bytes]] = None,
        keys_dir: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        passphrase: Optional[str] = None
    ):
        self.merchant_id = merchant_id
        self.mode = GatewayMode.TEST if test else GatewayMode.LIVE
        self.keys = KeyMaterial(
            private_key,
            mode=self.mode,
            public_key=public_key,
            keys_dir=keys_dir,
            passphrase=passphrase,
        )
        self.builder = RequestBuilder(merchant_id, self.keys)
        self.exchange = GatewayExchange(self.mode, session=session, timeout=timeout)

    @classmethod
    def from_env(cls, **overrides: Any) -> "Client":
        """Build a client from GIFDDO_* environment configuration."""
        kwargs: Dict[str, Any] = {
            "merchant_id": config.MERCHANT_ID,
            "test": config.is_test_mode(),
            "keys_dir": config.KEYS_DIR,
            "timeout": config.TIMEOUT,
            "passphrase": config.private_key_passphrase(),
        }
        kwargs.update(overrides)
        if "private_key" not in kwargs:
            kwargs["private_key"] = config.read_key_file(config.PRIVATE_KEY_PATH)
        return cls(**kwargs)

    @property
    def is_test(self) -> bool:
        return self.mode is GatewayMode.TEST

    def get_url(self) -> str:
        return self.exchange.url

    def set_public_key(self, public_key: Union[str, bytes]) -> None:
        self.keys.override_public_key(public_key)

    def set_session(self, session: requests.Session) -> None:
        self.exchange.session = session

    def initiate(self, params: Mapping[str, Any]) -> Dict[str, str]:
        """Build signed request fields. See RequestBuilder.initiate."""
        fields = self.builder.initiate(params)
        audit_log.payment_initiated(
            merchant_id=self.merchant_id,
            stamp=fields["VK_STAMP"],
            reference=fields["VK_REF"],
            amount=fields["VK_AMOUNT"],
            currency=fields["VK_CURR"],
        )
        return fields

    def request(self, params: Mapping[str, Any]) -> str:
        """
        Initiate a payment and submit it to the gateway.

        Returns:
            The URL the payer must be redirected to

        Raises:
            MissingParameterError, SigningError: before any network I/O
            TransportError, ProtocolError: from the gateway exchange
        """
        fields = self.initiate(params)
        try:
            location = self.exchange.submit(fields)
        except GifddoError as e:
            audit_log.gateway_failure(fields["VK_STAMP"], self.mode.value, str(e))
            raise
        audit_log.gateway_redirect(fields["VK_STAMP"], self.mode.value, location)
        return location

    def verify(self, response: Mapping[str, Any]) -> bool:
        """
        Verify a gateway response posted back to the merchant.

        The MAC is read from VK_MAC; a response without one is invalid.

        Raises:
            MissingParameterError: a field covered by the MAC is absent
            KeyMaterialError: the gateway public key cannot be read
        """
        signature = response.get(MAC_FIELD)
        if not signature:
            logger.warning("Gateway response has no %s field", MAC_FIELD)
            valid = False
        else:
            valid = signing.verify(response, signature, self.keys.public_key)
        audit_log.response_verified(response.get("VK_STAMP"), response.get(SERVICE_FIELD), valid)
        return valid
