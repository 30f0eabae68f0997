#!/usr/bin/env python3
"""
Gifddo Example - Complete Payment Round Trip

Builds a signed payment request, then plays the gateway's part with a
substitute key pair and verifies the response the merchant would receive.
Nothing is sent over the network.

Run with: python examples/payment_example.py
"""

import json

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from gifddo import Client, SUCCESSFUL_RESPONSE_CODE, UNSUCCESSFUL_RESPONSE_CODE, sign
from gifddo.fields import select_signed_values
from gifddo.logging_config import configure_logging


def generate_keypair():
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


def simulate_gateway_response(request_fields, gateway_private_key, paid=True):
    """Build the fields the gateway posts back to VK_RETURN."""
    response = {
        "VK_SERVICE": SUCCESSFUL_RESPONSE_CODE if paid else UNSUCCESSFUL_RESPONSE_CODE,
        "VK_VERSION": request_fields["VK_VERSION"],
        "VK_SND_ID": "GIFDDO",
        "VK_REC_ID": request_fields["VK_SND_ID"],
        "VK_STAMP": request_fields["VK_STAMP"],
        "VK_REF": request_fields["VK_REF"],
        "VK_MSG": request_fields["VK_MSG"],
        "VK_AUTO": "N",
    }
    if paid:
        response.update({
            "VK_T_NO": "100042",
            "VK_AMOUNT": request_fields["VK_AMOUNT"],
            "VK_CURR": request_fields["VK_CURR"],
            "VK_REC_ACC": "EE382200221020145685",
            "VK_REC_NAME": "Example Shop",
            "VK_SND_ACC": "EE471000001020145685",
            "VK_SND_NAME": "John Smith",
            "VK_T_DATETIME": request_fields["VK_DATETIME"],
        })
    response["VK_MAC"] = sign(select_signed_values(response), gateway_private_key)
    return response


def main():
    configure_logging("INFO", json_format=False)

    merchant_private, _ = generate_keypair()
    gateway_private, gateway_public = generate_keypair()

    client = Client("EXAMPLESHOP", merchant_private, test=True, public_key=gateway_public)

    print("=" * 60)
    print("STEP 1: Build signed payment request")
    print("=" * 60)
    fields = client.initiate({
        "amount": 10,
        "reference": 1337,
        "email": "john@example.com",
        "first_name": "John",
        "last_name": "Smith",
        "return_url": "https://shop.example.com/return",
    })
    print(json.dumps(fields, indent=2))
    print(f"\nWould POST to: {client.get_url()}")

    print("\n" + "=" * 60)
    print("STEP 2: Verify gateway responses")
    print("=" * 60)
    for paid in (True, False):
        response = simulate_gateway_response(fields, gateway_private, paid=paid)
        print(f"VK_SERVICE={response['VK_SERVICE']}: valid={client.verify(response)}")

    tampered = simulate_gateway_response(fields, gateway_private)
    tampered["VK_AMOUNT"] = "0.01"
    print(f"Tampered amount: valid={client.verify(tampered)}")


if __name__ == "__main__":
    main()
