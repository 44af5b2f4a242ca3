"""Deterministic pseudo-random source for reproducible patterns."""

from models import DEFAULT_SEED

MULTIPLIER = 9301
INCREMENT = 49297
MODULUS = 233280


class SeededRandom:
    """Linear congruential generator.

    AIDEV-NOTE: The recurrence must stay exactly
    ``seed = (seed * 9301 + 49297) % 233280`` - do not swap in the
    ``random`` module. Saved patterns are only reproducible with this
    sequence.
    """

    def __init__(self, seed: int = DEFAULT_SEED):
        self.seed = int(seed)

    def next(self) -> float:
        """Advance the generator and return a value in [0, 1)."""
        self.seed = (self.seed * MULTIPLIER + INCREMENT) % MODULUS
        return self.seed / MODULUS

    __call__ = next
