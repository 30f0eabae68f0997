"""
Gifddo Protocol Fields

Protocol identifiers and the tables that decide which fields of a message
are covered by its MAC.

Outbound requests are signed over every field in REQUEST_FIELDS. Inbound
responses are signed over one of two fixed lists, chosen by the VK_SERVICE
code the gateway reports. Fields outside the chosen list (VK_AUTO, VK_MAC,
VK_ENCODING, ...) never take part in the signature.
"""

from enum import Enum
from typing import Dict, List, Mapping, Tuple

from .exceptions import MissingParameterError

REQUEST_CODE = "1012"
SUCCESSFUL_RESPONSE_CODE = "1111"
UNSUCCESSFUL_RESPONSE_CODE = "1911"
PROTOCOL_VERSION = "008"

SERVICE_FIELD = "VK_SERVICE"
MAC_FIELD = "VK_MAC"

REQUEST_FIELDS: Tuple[str, ...] = (
    "VK_SERVICE",
    "VK_VERSION",
    "VK_SND_ID",
    "VK_STAMP",
    "VK_AMOUNT",
    "VK_CURR",
    "VK_REF",
    "VK_MSG",
    "VK_RETURN",
    "VK_CANCEL",
    "VK_DATETIME",
)


class TransactionOutcome(str, Enum):
    """Outcome reported by a gateway response."""
    SUCCESSFUL = "SUCCESSFUL"
    UNSUCCESSFUL = "UNSUCCESSFUL"


SIGNED_FIELDS: Dict[TransactionOutcome, Tuple[str, ...]] = {
    TransactionOutcome.SUCCESSFUL: (
        "VK_SERVICE",
        "VK_VERSION",
        "VK_SND_ID",
        "VK_REC_ID",
        "VK_STAMP",
        "VK_T_NO",
        "VK_AMOUNT",
        "VK_CURR",
        "VK_REC_ACC",
        "VK_REC_NAME",
        "VK_SND_ACC",
        "VK_SND_NAME",
        "VK_REF",
        "VK_MSG",
        "VK_T_DATETIME",
    ),
    TransactionOutcome.UNSUCCESSFUL: (
        "VK_SERVICE",
        "VK_VERSION",
        "VK_SND_ID",
        "VK_REC_ID",
        "VK_STAMP",
        "VK_REF",
        "VK_MSG",
    ),
}

# Service codes with their own field list; anything else is UNSUCCESSFUL.
SERVICE_CODE_OUTCOMES: Dict[str, TransactionOutcome] = {
    SUCCESSFUL_RESPONSE_CODE: TransactionOutcome.SUCCESSFUL,
    UNSUCCESSFUL_RESPONSE_CODE: TransactionOutcome.UNSUCCESSFUL,
}


def outcome_for(response: Mapping[str, object]) -> TransactionOutcome:
    """Classify a response by its VK_SERVICE code."""
    code = str(response.get(SERVICE_FIELD, ""))
    return SERVICE_CODE_OUTCOMES.get(code, TransactionOutcome.UNSUCCESSFUL)


def signed_field_names(outcome: TransactionOutcome) -> Tuple[str, ...]:
    return SIGNED_FIELDS[outcome]


def select_signed_values(response: Mapping[str, object]) -> List[str]:
    """
    Return the values of a response that are covered by its MAC, in order.

    Raises:
        MissingParameterError: a field of the selected list is absent
    """
    names = signed_field_names(outcome_for(response))
    for name in names:
        if name not in response:
            raise MissingParameterError(name)
    return [str(response[name]) for name in names]
