from __future__ import annotations

import logging
import threading
from typing import List, Optional, Tuple

from qkd_chat.core.errors import NotInitialized
from qkd_chat.modules.bb84.randomness import RandomSource
from qkd_chat.modules.bb84.service import KeyAgreementSession
from qkd_chat.modules.channel.service import KeyedChannel, Message

logger = logging.getLogger(__name__)

class SessionRegistry:
    """
    Holds the single active (session, channel) pair for the process.

    One lock guards the active pair and the channel's message history.
    initialize() replaces the pair wholesale; the previous history is dropped.
    A run that fails leaves the current pair in place.
    """

    def __init__(self, lock: Optional[threading.Lock] = None,
                 source_factory=RandomSource) -> None:
        self._lock = lock or threading.Lock()
        self._source_factory = source_factory
        self._session: Optional[KeyAgreementSession] = None
        self._channel: Optional[KeyedChannel] = None

    def initialize(self, requested_bits: int) -> List[int]:
        return list(self.initialize_session(requested_bits).shared_key)

    def initialize_session(self, requested_bits: int) -> KeyAgreementSession:
        """Run a fresh agreement, install it, and return the installed session."""
        session = KeyAgreementSession(requested_bits, source=self._source_factory())
        key = session.run()
        channel = KeyedChannel(key, lock=self._lock)
        with self._lock:
            replaced = self._session is not None
            self._session, self._channel = session, channel
        logger.info("session_initialized",
                    extra={"requested_bits": requested_bits, "key_bits": len(key), "replaced": replaced})
        return session

    def snapshot(self) -> Tuple[KeyAgreementSession, KeyedChannel]:
        with self._lock:
            session, channel = self._session, self._channel
        if session is None or channel is None:
            raise NotInitialized()
        return session, channel

    @property
    def initialized(self) -> bool:
        with self._lock:
            return self._channel is not None

    def current_session(self) -> KeyAgreementSession:
        return self.snapshot()[0]

    def current_channel(self) -> KeyedChannel:
        return self.snapshot()[1]

    def current_shared_key(self) -> List[int]:
        return list(self.snapshot()[1].key)

    # Boundary operations used by the request layer

    def encrypt(self, plaintext: str, sender: str) -> Message:
        return self.current_channel().encrypt(plaintext.encode("utf-8"), sender)

    def decrypt(self, ciphertext: str) -> str:
        raw = self.current_channel().decrypt(ciphertext)
        return raw.decode("utf-8", errors="replace")

    def list_messages(self) -> List[Message]:
        # Empty list rather than NotInitialized: clients poll before initializing.
        with self._lock:
            channel = self._channel
        if channel is None:
            return []
        return channel.messages()
