from __future__ import annotations

import base64
import binascii
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence

from qkd_chat.core.errors import EmptyKey, MalformedCiphertext

logger = logging.getLogger(__name__)

def pack_key(bits: Sequence[int]) -> bytes:
    """Pack bits MSB-first, 8 per byte; the last byte is zero-padded."""
    out = bytearray((len(bits) + 7) // 8)
    for i, bit in enumerate(bits):
        if bit:
            out[i // 8] |= 1 << (7 - i % 8)
    return bytes(out)

def xor_cycle(data: bytes, key: bytes) -> bytes:
    # Repeating-key XOR; self-inverse, so it serves both directions.
    if not key:
        raise EmptyKey()
    klen = len(key)
    return bytes(b ^ key[i % klen] for i, b in enumerate(data))

@dataclass(frozen=True)
class Message:
    ciphertext: str
    sender: str

class KeyedChannel:
    def __init__(self, key: Sequence[int], lock: Optional[threading.Lock] = None) -> None:
        self._key = tuple(key)
        self._key_bytes = pack_key(self._key)
        self._history: List[Message] = []
        self._lock = lock or threading.Lock()

    @property
    def key(self) -> tuple:
        return self._key

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    def encrypt(self, plaintext: bytes, sender: str) -> Message:
        cipher = xor_cycle(plaintext, self._key_bytes)
        msg = Message(ciphertext=base64.b64encode(cipher).decode("ascii"), sender=sender)
        with self._lock:
            self._history.append(msg)
        logger.info("channel_message_encrypted", extra={"sender": sender, "bytes": len(plaintext)})
        return msg

    def decrypt(self, ciphertext: str) -> bytes:
        if not self._key_bytes:
            raise EmptyKey()
        try:
            raw = base64.b64decode(ciphertext, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise MalformedCiphertext(f"cannot decode ciphertext: {exc}") from exc
        return xor_cycle(raw, self._key_bytes)

    def messages(self) -> List[Message]:
        with self._lock:
            return list(self._history)

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)
