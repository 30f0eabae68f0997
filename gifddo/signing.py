"""
Gifddo Message Signing

RSA (PKCS#1 v1.5) over SHA-1, as the bank-link protocol requires.
Signatures travel as base64 text in the VK_MAC field.

Outbound requests are signed with the merchant's private key. Inbound
responses are verified with the gateway's public key; a mismatch is an
expected outcome and is reported as False, never raised.
"""

import binascii
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .canonicalization import pack
from .exceptions import SigningError
from .fields import select_signed_values
from .util import b64d, b64e, to_bytes

logger = logging.getLogger(__name__)

PemData = Union[str, bytes]


def load_private_key(
    private_key: PemData,
    passphrase: Optional[PemData] = None
) -> rsa.RSAPrivateKey:
    """
    Load an RSA private key from PEM.

    Raises:
        SigningError: the key is empty, malformed or not an RSA key
    """
    data = to_bytes(private_key or b"")
    if not data.strip():
        raise SigningError("Private key is empty")

    password = to_bytes(passphrase) if passphrase else None
    try:
        key = serialization.load_pem_private_key(data, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(f"Invalid private key: {e}") from e

    if not isinstance(key, rsa.RSAPrivateKey):
        raise SigningError(f"Private key must be RSA, got {type(key).__name__}")
    return key


def load_public_key(public_key: PemData) -> rsa.RSAPublicKey:
    """
    Load an RSA public key from a PEM public key or X.509 certificate.

    Raises ValueError for anything that is not an RSA public key.
    """
    data = to_bytes(public_key)
    if b"BEGIN CERTIFICATE" in data:
        key = x509.load_pem_x509_certificate(data).public_key()
    else:
        key = serialization.load_pem_public_key(data)

    if not isinstance(key, rsa.RSAPublicKey):
        raise ValueError(f"Public key must be RSA, got {type(key).__name__}")
    return key


def sign(
    values: Iterable[Any],
    private_key: PemData,
    passphrase: Optional[PemData] = None
) -> str:
    """
    Sign an ordered sequence of values.

    Args:
        values: Field values in protocol order
        private_key: PEM encoded RSA private key
        passphrase: Optional passphrase for an encrypted key

    Returns:
        Base64 encoded signature

    Raises:
        SigningError: the key or the signing primitive rejected the input
    """
    key = load_private_key(private_key, passphrase)
    message = pack(values)
    try:
        signature = key.sign(message, padding.PKCS1v15(), hashes.SHA1())
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise SigningError(f"Signing failed: {e}") from e
    return b64e(signature)


def verify_values(values: Iterable[Any], signature: PemData, public_key: PemData) -> bool:
    """Check a base64 signature over an ordered sequence of values."""
    try:
        message = pack(values)
        key = load_public_key(public_key)
        key.verify(b64d(signature), message, padding.PKCS1v15(), hashes.SHA1())
        return True
    except InvalidSignature:
        return False
    except (ValueError, TypeError, binascii.Error, UnsupportedAlgorithm) as e:
        logger.debug("Signature check failed before verification: %s", e)
        return False


def verify(response: Mapping[str, Any], signature: PemData, public_key: PemData) -> bool:
    """
    Verify the MAC of a gateway response.

    The signed field list is chosen from the response's VK_SERVICE code;
    all other fields are ignored.

    Returns:
        True if the signature is valid, False otherwise

    Raises:
        MissingParameterError: a field of the signed list is absent
    """
    return verify_values(select_signed_values(response), signature, public_key)
