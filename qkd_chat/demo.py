from __future__ import annotations

import argparse
import logging
import sys

from qkd_chat.core.config import settings
from qkd_chat.core.errors import QKDError
from qkd_chat.modules.session.registry import SessionRegistry
from qkd_chat.utils.logging import setup_logging

logger = logging.getLogger(__name__)

def run(bits: int) -> int:
    registry = SessionRegistry()
    try:
        registry.initialize(bits)
    except QKDError as exc:
        logger.error("demo_protocol_failed", extra={"error": type(exc).__name__})
        print(f"Protocol failed: {exc}")
        return 1

    summary = registry.current_session().summary()
    print("\n=== QKD Protocol Results ===")
    print(f"Initial number of bits: {summary['requested_bits']}")
    print(f"Final key length: {summary['key_length']}")
    print(f"Error rate: {summary['error_rate'] * 100:.2f}%")

    print("\n=== Secure Message Exchange ===")
    exchange = [
        ("Alice", "Bob", "message", "Hello Bob! This is a secret message from Alice."),
        ("Bob", "Alice", "reply", "Hi Alice! I received your secret message successfully!"),
    ]
    for sender, recipient, kind, text in exchange:
        try:
            msg = registry.encrypt(text, sender)
            recovered = registry.decrypt(msg.ciphertext)
        except QKDError as exc:
            print(f"Exchange failed: {exc}")
            return 1
        print(f"\n{sender}'s original message: {text}")
        print(f"Encrypted {kind}: {msg.ciphertext}")
        print(f"{recipient} decrypted the {kind}: {recovered}")
    return 0

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="BB84 key agreement demonstration")
    parser.add_argument("--bits", type=int, default=settings.DEFAULT_KEY_BITS,
                        help="number of raw bits Alice sends")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)
    if args.bits < 0:
        parser.error("--bits must be >= 0")
    setup_logging(args.log_level)
    return run(args.bits)

if __name__ == "__main__":
    sys.exit(main())
