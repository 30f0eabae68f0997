"""
Key material for the Gifddo client.

The merchant's private key is supplied by the caller. The gateway's public
key is read from a mode specific PEM file the first time it is needed and
cached for the lifetime of the KeyMaterial instance.
"""

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from . import config
from .exceptions import KeyMaterialError
from .util import to_bytes

logger = logging.getLogger(__name__)

PUBLIC_KEY_TEMPLATE = "gifddo-{mode}.pem"


class GatewayMode(str, Enum):
    """Which gateway the client talks to."""
    LIVE = "live"
    TEST = "test"


class KeyMaterial:
    """
    Private key plus lazily resolved gateway public key.

    Thread-safe: the public key file is read at most once per instance,
    unless replaced with override_public_key().
    """

    def __init__(
        self,
        private_key: Union[str, bytes],
        mode: GatewayMode = GatewayMode.LIVE,
        public_key: Optional[Union[str, bytes]] = None,
        keys_dir: Optional[str] = None,
        passphrase: Optional[str] = None
    ):
        self._private_key = to_bytes(private_key or b"")
        self.mode = GatewayMode(mode)
        self.passphrase = passphrase
        self._keys_dir = Path(keys_dir or config.KEYS_DIR)
        self._lock = threading.Lock()
        self._public_key: Optional[bytes] = to_bytes(public_key) if public_key else None

    @property
    def private_key(self) -> bytes:
        return self._private_key

    @property
    def public_key_path(self) -> Path:
        return self._keys_dir / PUBLIC_KEY_TEMPLATE.format(mode=self.mode.value)

    @property
    def public_key(self) -> bytes:
        """
        Gateway public key PEM.

        Raises:
            KeyMaterialError: the mode's key file cannot be read
        """
        with self._lock:
            if self._public_key is None:
                self._public_key = self._read_public_key()
            return self._public_key

    def override_public_key(self, public_key: Union[str, bytes]) -> None:
        """Use the given PEM instead of the mode's key file."""
        with self._lock:
            self._public_key = to_bytes(public_key)

    def _read_public_key(self) -> bytes:
        path = self.public_key_path
        try:
            data = config.read_key_file(str(path))
        except OSError as e:
            raise KeyMaterialError(f"Cannot read gateway public key {path}: {e}") from e
        logger.debug("Loaded %s gateway public key from %s", self.mode.value, path)
        return data
