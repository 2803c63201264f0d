"""
Hex codec and HMAC signer used for request signing and callback verification.
"""
from __future__ import annotations

import hashlib
import hmac
import re
from functools import cached_property
from typing import Union

from .errors import ConfigurationError, FormatError

_HEX_RE = re.compile(r"[0-9a-fA-F]*")


def to_hex(data: Union[bytes, bytearray, memoryview]) -> str:
    """Encode bytes as a lowercase hex string."""
    return bytes(data).hex()


def from_hex(value: str, allow_empty: bool = False) -> bytes:
    """
    Decode a hex string into bytes.

    Raises FormatError on odd length, non-hex characters, or an empty string
    (unless allow_empty is set).
    """
    if not isinstance(value, str):
        raise FormatError(f"hex value must be a string, got {type(value).__name__}")
    if not value and not allow_empty:
        raise FormatError("empty hex string")
    if len(value) % 2:
        raise FormatError(f"odd-length hex string ({len(value)} chars)")
    if not _HEX_RE.fullmatch(value):
        raise FormatError("hex string contains non-hex characters")
    return bytes.fromhex(value)


def _normalize_algorithm(algorithm: str) -> str:
    # accepts "SHA-256", "sha256", "SHA256"
    return algorithm.replace("-", "").replace("_", "").lower()


class HMACSigner:
    """
    HMAC over UTF-8 messages with hex-encoded signatures.

    The keyed HMAC state is derived on first use and copied for every call.
    """

    def __init__(self, algorithm: str, secret: str):
        if not secret:
            raise ConfigurationError("HMAC secret is required")
        name = _normalize_algorithm(algorithm)
        if name not in hashlib.algorithms_available:
            raise ConfigurationError(f"Unsupported hash algorithm: {algorithm}")
        self.algorithm = name
        self._secret = secret

    @cached_property
    def _keyed(self) -> "hmac.HMAC":
        return hmac.new(self._secret.encode("utf-8"), digestmod=self.algorithm)

    def _digest(self, message: Union[str, bytes]) -> bytes:
        if isinstance(message, str):
            message = message.encode("utf-8")
        mac = self._keyed.copy()
        mac.update(message)
        return mac.digest()

    def sign(self, message: Union[str, bytes]) -> str:
        return to_hex(self._digest(message))

    def verify(self, message: Union[str, bytes], signature: str) -> bool:
        """Constant-time check of a hex signature. Malformed input yields False."""
        try:
            expected = from_hex(signature)
        except FormatError:
            return False
        return hmac.compare_digest(self._digest(message), expected)

    def __repr__(self):
        return f"<{self.__class__.__name__}(algorithm={self.algorithm})>"

