"""
Gifddo Bank-Link Client

Version: 1.0.0

Builds signed payment-initiation requests for the Gifddo gateway and
verifies the signed responses it returns.

Every message is packed into a canonical byte string (three digit length
prefix per value, in protocol order) and signed with RSA + SHA-1. Which
response fields are covered by the signature depends on the reported
outcome: successful (1111) responses sign 15 fields, everything else signs 7.

Usage:
    from gifddo import Client

    client = Client("MERCHANT", private_key_pem, test=True)

    # Send the payer to the gateway
    url = client.request({
        "amount": "10.00",
        "reference": "1337",
        "email": "payer@example.com",
        "first_name": "John",
        "last_name": "Smith",
        "return_url": "https://shop.example.com/return",
    })

    # Check what the gateway posts back
    if client.verify(request.form):
        mark_paid(request.form["VK_REF"])
"""

__version__ = "1.0.0"

# Canonicalization
from .canonicalization import pack, unpack, FieldLengthError

# Protocol fields
from .fields import (
    REQUEST_CODE,
    SUCCESSFUL_RESPONSE_CODE,
    UNSUCCESSFUL_RESPONSE_CODE,
    PROTOCOL_VERSION,
    TransactionOutcome,
    SIGNED_FIELDS,
    outcome_for,
    signed_field_names,
    select_signed_values,
)

# Signing
from .signing import sign, verify, verify_values

# Keys
from .keys import GatewayMode, KeyMaterial

# Request / exchange
from .request import RequestBuilder
from .exchange import GatewayExchange, LIVE_URL, TEST_URL

# Client
from .client import Client

# Errors
from .exceptions import (
    GifddoError,
    MissingParameterError,
    SigningError,
    KeyMaterialError,
    TransportError,
    ProtocolError,
)


__all__ = [
    "__version__",

    # Canonicalization
    "pack",
    "unpack",
    "FieldLengthError",

    # Fields
    "REQUEST_CODE",
    "SUCCESSFUL_RESPONSE_CODE",
    "UNSUCCESSFUL_RESPONSE_CODE",
    "PROTOCOL_VERSION",
    "TransactionOutcome",
    "SIGNED_FIELDS",
    "outcome_for",
    "signed_field_names",
    "select_signed_values",

    # Signing
    "sign",
    "verify",
    "verify_values",

    # Keys
    "GatewayMode",
    "KeyMaterial",

    # Request / exchange
    "RequestBuilder",
    "GatewayExchange",
    "LIVE_URL",
    "TEST_URL",

    # Client
    "Client",

    # Errors
    "GifddoError",
    "MissingParameterError",
    "SigningError",
    "KeyMaterialError",
    "TransportError",
    "ProtocolError",
]
