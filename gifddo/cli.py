#!/usr/bin/env python3
"""
Gifddo Command Line Interface

Usage:
    gifddo initiate --amount 10 --reference 1337 --email ... [--submit]
    gifddo verify --response <file>
    gifddo pack <value>...
    gifddo pack --decode <message>...
    gifddo keygen --output <dir>

Merchant id, keys and mode come from the GIFDDO_* environment variables
unless given on the command line.
"""

import argparse
import json
import sys
from pathlib import Path

from . import config
from .exceptions import GifddoError
from .logging_config import configure_logging


def load_json(path: str) -> dict:
    """Load JSON from file."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def build_client(args):
    from .client import Client

    overrides = {}
    if args.merchant_id:
        overrides["merchant_id"] = args.merchant_id
    if args.private_key:
        overrides["private_key"] = config.read_key_file(args.private_key)
    if args.public_key:
        overrides["public_key"] = config.read_key_file(args.public_key)
    if args.test:
        overrides["test"] = True
    return Client.from_env(**overrides)


def cmd_initiate(args):
    """Build a signed payment request, optionally submitting it."""
    client = build_client(args)
    params = {
        "amount": args.amount,
        "reference": args.reference,
        "email": args.email,
        "first_name": args.first_name,
        "last_name": args.last_name,
        "return_url": args.return_url,
        "cancel_url": args.cancel_url,
        "currency": args.currency,
        "stamp": args.stamp,
    }

    if args.submit:
        print(client.request(params))
    else:
        print(json.dumps(client.initiate(params), indent=2))
    return 0


def cmd_verify(args):
    """Verify the MAC of a gateway response."""
    client = build_client(args)
    response = load_json(args.response)

    if client.verify(response):
        print("✓ VALID")
        return 0
    print("✗ INVALID")
    return 1


def cmd_pack(args):
    """Print the canonical message for the given values, or decode messages."""
    from .canonicalization import pack, unpack

    if args.decode:
        for message in args.values:
            for value in unpack(message.encode('utf-8')):
                print(value)
    else:
        print(pack(args.values).decode('utf-8'))
    return 0


def cmd_keygen(args):
    """Generate an RSA key pair for testing against a substitute gateway."""
    from cryptography.hazmat.primitives import serialization
    from cryptography.hazmat.primitives.asymmetric import rsa

    key = rsa.generate_private_key(public_exponent=65537, key_size=args.bits)
    out = Path(args.output)
    out.mkdir(parents=True, exist_ok=True)

    (out / "privkey.pem").write_bytes(key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ))
    (out / "pubkey.pem").write_bytes(key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ))
    print(f"Key pair written to: {out}")
    return 0


def _add_client_options(parser):
    parser.add_argument("-m", "--merchant-id", help="Merchant id (default: $GIFDDO_MERCHANT_ID)")
    parser.add_argument("-k", "--private-key", help="Private key PEM file")
    parser.add_argument("-p", "--public-key", help="Gateway public key PEM file")
    parser.add_argument("-t", "--test", action="store_true", help="Use the staging gateway")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="gifddo",
        description="Gifddo bank-link client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gifddo initiate --amount 10 --reference 1337 --email a@b.c \\
      --first-name John --last-name Smith --return-url https://shop/return
  gifddo verify -r response.json
  gifddo pack 1012 008 TEST
  gifddo keygen -o keys/
        """
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Log level")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # initiate
    init_parser = subparsers.add_parser("initiate", help="Build a signed payment request")
    _add_client_options(init_parser)
    init_parser.add_argument("--amount", required=True)
    init_parser.add_argument("--reference", required=True)
    init_parser.add_argument("--email", required=True)
    init_parser.add_argument("--first-name", required=True)
    init_parser.add_argument("--last-name", required=True)
    init_parser.add_argument("--return-url", required=True)
    init_parser.add_argument("--cancel-url")
    init_parser.add_argument("--currency")
    init_parser.add_argument("--stamp")
    init_parser.add_argument("--submit", action="store_true", help="POST to the gateway and print the redirect URL")

    # verify
    verify_parser = subparsers.add_parser("verify", help="Verify a gateway response")
    _add_client_options(verify_parser)
    verify_parser.add_argument("-r", "--response", required=True, help="Response fields JSON file")

    # pack
    pack_parser = subparsers.add_parser("pack", help="Canonicalize values")
    pack_parser.add_argument("values", nargs="+")
    pack_parser.add_argument("-d", "--decode", action="store_true", help="Decode packed messages")

    # keygen
    keygen_parser = subparsers.add_parser("keygen", help="Generate an RSA key pair")
    keygen_parser.add_argument("-o", "--output", required=True, help="Output directory")
    keygen_parser.add_argument("-b", "--bits", type=int, default=2048, help="Key size")

    return parser


COMMANDS = {
    "initiate": cmd_initiate,
    "verify": cmd_verify,
    "pack": cmd_pack,
    "keygen": cmd_keygen,
}


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 2

    configure_logging(args.log_level, json_format=config.LOG_JSON)
    try:
        return command(args)
    except (GifddoError, ValueError, OSError) as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
