"""
Configuration module for the Gifddo client.

Centralizes configuration with environment variable support.
"""

import os
from pathlib import Path
from typing import Dict, Optional

# ============================================================
# Environment Configuration
# ============================================================

MERCHANT_ID = os.getenv("GIFDDO_MERCHANT_ID", "")

# Signing configuration
PRIVATE_KEY_PATH = os.getenv("GIFDDO_PRIVATE_KEY_PATH", "secrets/gifddo_private_key.pem")
PRIVATE_KEY_PASSPHRASE = os.getenv("GIFDDO_PRIVATE_KEY_PASSPHRASE", "")

# Directory holding gifddo-live.pem / gifddo-test.pem
KEYS_DIR = os.getenv("GIFDDO_KEYS_DIR", "keys")

# HTTP timeout (seconds)
TIMEOUT = float(os.getenv("GIFDDO_TIMEOUT", "10"))

# Logging
LOG_LEVEL = os.getenv("GIFDDO_LOG_LEVEL", "INFO")
LOG_JSON = os.getenv("GIFDDO_LOG_JSON", "true").lower() in ("1", "true", "yes")


def is_test_mode() -> bool:
    """Check if the client should talk to the staging gateway."""
    return os.getenv("GIFDDO_TEST_MODE", "").lower() in ("1", "true", "yes")


def read_key_file(path: str) -> bytes:
    """Read a PEM file as bytes."""
    with open(path, "rb") as f:
        return f.read()


def private_key_passphrase() -> Optional[str]:
    return PRIVATE_KEY_PASSPHRASE or None


# ============================================================
# Validation
# ============================================================

def validate_config() -> Dict[str, bool]:
    """
    Validate that all required configuration is present.
    Returns dict of name -> present.
    """
    return {
        "merchant_id": bool(MERCHANT_ID),
        "private_key": Path(PRIVATE_KEY_PATH).exists(),
        "keys_dir": Path(KEYS_DIR).is_dir(),
    }
