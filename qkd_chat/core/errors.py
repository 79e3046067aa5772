from __future__ import annotations

from typing import Any, Dict, Optional


class QKDError(Exception):
    """Base class for every failure the key agreement core surfaces."""
    code = 500
    public_message = "Unexpected key agreement failure."

    def __init__(self, message: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        super().__init__(message or self.public_message)
        self.context = context or {}


class EntropyUnavailable(QKDError):
    code = 503
    public_message = "Entropy source unavailable."


class NotInitialized(QKDError):
    code = 409
    public_message = "Protocol not initialized."


class MalformedCiphertext(QKDError):
    code = 400
    public_message = "Ciphertext is not valid base64."


class EmptyKey(QKDError):
    # raised on first use, construction accepts an empty key
    code = 409
    public_message = "Shared key is empty."
