from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from qkd_chat.modules.bb84.randomness import Basis, RandomSource

logger = logging.getLogger(__name__)

@dataclass
class Participant:
    name: str
    bits: Optional[List[int]] = None
    bases: Optional[List[Basis]] = None

    def generate_bits(self, n: int, source: RandomSource) -> None:
        self.bits = [source.next_bit() for _ in range(n)]

    def generate_bases(self, n: int, source: RandomSource) -> None:
        self.bases = [source.next_basis() for _ in range(n)]

@dataclass
class KeyAgreementSession:
    """
    Classical BB84 exercise: not a quantum simulation.

    Alice draws bits and bases, Bob draws bases only. Positions where the two
    bases agree are kept (sifting); the shared key is Alice's bits at those
    positions in index order. Transmission outcomes are recorded only so the
    error rate can be reported.
    """

    requested_bits: int
    source: RandomSource = field(default_factory=RandomSource)
    alice: Participant = field(default_factory=lambda: Participant("Alice"))
    bob: Participant = field(default_factory=lambda: Participant("Bob"))
    transmission_outcomes: List[int] = field(default_factory=list)
    shared_key: Optional[List[int]] = None

    def __post_init__(self) -> None:
        if self.requested_bits < 0:
            raise ValueError("requested_bits must be >= 0")

    def run(self) -> List[int]:
        if self.shared_key is not None:
            return self.shared_key
        n = self.requested_bits

        # Any EntropyUnavailable below propagates; a session that raised
        # here must be discarded by the caller.
        self.alice.generate_bits(n, self.source)
        self.alice.generate_bases(n, self.source)
        self.bob.generate_bases(n, self.source)
        self._simulate_transmission()
        self.shared_key = self._sift()

        logger.info("bb84_key_sifted",
                    extra={"requested_bits": n, "key_bits": len(self.shared_key),
                           "error_rate": self.error_rate()})
        return self.shared_key

    def _matches(self) -> List[int]:
        return [i for i in range(self.requested_bits) if self.alice.bases[i] == self.bob.bases[i]]

    def _simulate_transmission(self) -> None:
        outcomes: List[int] = []
        for i in range(self.requested_bits):
            if self.alice.bases[i] == self.bob.bases[i]:
                outcomes.append(self.alice.bits[i])
            else:
                # wrong basis: Bob's measurement is uniform noise
                outcomes.append(self.source.next_bit())
        self.transmission_outcomes = outcomes

    def _sift(self) -> List[int]:
        return [self.alice.bits[i] for i in self._matches()]

    @property
    def completed(self) -> bool:
        return self.shared_key is not None

    def error_rate(self) -> float:
        if not self.completed:
            return 0.0
        matched = self._matches()
        if not matched:
            return 0.0
        errors = sum(1 for i in matched if self.transmission_outcomes[i] != self.alice.bits[i])
        return errors / len(matched)

    def summary(self) -> Dict[str, Any]:
        return {
            "requested_bits": self.requested_bits,
            "key_length": len(self.shared_key or []),
            "matched_bases": len(self._matches()) if self.completed else 0,
            "error_rate": self.error_rate(),
        }
