"""
Gifddo Payment Initiation

Builds the ordered, signed field set that sends a payer to the gateway.

Required inputs are checked for presence before anything is read, so a
missing field is always reported by name. Optional inputs get their
defaults only after that check:

    stamp       random 20 character lowercase alphanumeric identifier
    currency    EUR
    cancel_url  the return_url
"""

import logging
from typing import Any, Dict, Mapping

from . import signing
from .exceptions import MissingParameterError
from .fields import MAC_FIELD, PROTOCOL_VERSION, REQUEST_CODE
from .keys import KeyMaterial
from .util import date_string, random_string

logger = logging.getLogger(__name__)

REQUIRED_PARAMETERS = (
    "amount",
    "reference",
    "email",
    "first_name",
    "last_name",
    "return_url",
)

DEFAULT_CURRENCY = "EUR"
MESSAGE_SEPARATOR = "|"
STAMP_LENGTH = 20


def require_parameters(params: Mapping[str, Any]) -> None:
    """
    Raises:
        MissingParameterError: naming the first required input not present
    """
    for name in REQUIRED_PARAMETERS:
        if name not in params or params[name] is None:
            raise MissingParameterError(name)


class RequestBuilder:
    """Assembles and signs payment initiation requests for one merchant."""

    def __init__(self, merchant_id: str, key_material: KeyMaterial):
        self.merchant_id = merchant_id
        self.key_material = key_material

    def initiate(self, params: Mapping[str, Any]) -> Dict[str, str]:
        """
        Build the signed request fields.

        Args:
            params: amount, reference, email, first_name, last_name,
                return_url; optionally stamp, currency, cancel_url

        Returns:
            Ordered VK_* fields ending with VK_MAC

        Raises:
            MissingParameterError: a required input is absent
            SigningError: the private key is empty or invalid
        """
        require_parameters(params)

        stamp = params.get("stamp")
        if stamp is None:
            stamp = random_string(STAMP_LENGTH)
        currency = params.get("currency")
        if currency is None:
            currency = DEFAULT_CURRENCY
        cancel_url = params.get("cancel_url")
        if cancel_url is None:
            cancel_url = params["return_url"]

        message = MESSAGE_SEPARATOR.join(
            str(params[name]) for name in ("email", "first_name", "last_name")
        )

        fields: Dict[str, str] = {
            "VK_SERVICE": REQUEST_CODE,
            "VK_VERSION": PROTOCOL_VERSION,
            "VK_SND_ID": str(self.merchant_id),
            "VK_STAMP": str(stamp),
            "VK_AMOUNT": str(params["amount"]),
            "VK_CURR": str(currency),
            "VK_REF": str(params["reference"]),
            "VK_MSG": message,
            "VK_RETURN": str(params["return_url"]),
            "VK_CANCEL": str(cancel_url),
            "VK_DATETIME": date_string(),
        }

        fields[MAC_FIELD] = signing.sign(
            fields.values(),
            self.key_material.private_key,
            self.key_material.passphrase,
        )
        logger.debug("Built payment request stamp=%s ref=%s", fields["VK_STAMP"], fields["VK_REF"])
        return fields
