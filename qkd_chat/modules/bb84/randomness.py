from __future__ import annotations

import secrets
from enum import IntEnum
from typing import Callable, Optional

from qkd_chat.core.errors import EntropyUnavailable

class Basis(IntEnum):
    RECTILINEAR = 0
    DIAGONAL = 1

def _system_bit() -> int:
    return secrets.randbits(1)

class RandomSource:
    """
    Uniform bit generator backed by the operating system CSPRNG.

    `entropy` may be swapped for any zero-argument callable returning 0 or 1;
    tests use this to script draws. Failures of the underlying source surface
    as EntropyUnavailable, never as a substituted default bit.
    """

    def __init__(self, entropy: Optional[Callable[[], int]] = None) -> None:
        self._entropy = entropy or _system_bit

    def next_bit(self) -> int:
        try:
            bit = self._entropy()
        except (OSError, NotImplementedError) as exc:
            raise EntropyUnavailable(f"entropy source failed: {exc}") from exc
        return bit & 1

    def next_basis(self) -> Basis:
        return Basis(self.next_bit())
