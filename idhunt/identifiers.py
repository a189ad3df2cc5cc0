"""
Random file identifier generation.

Identifiers look like UUIDs (8-4-4-4-12 groups) but every character is drawn
uniformly from ``[A-Za-z0-9]`` instead of hex, so the guess space is far
larger than a real UUID's.
"""

from __future__ import annotations

import random
import string
from typing import Optional, Sequence

ALPHABET = string.ascii_letters + string.digits
GROUP_LENGTHS: Sequence[int] = (8, 4, 4, 4, 12)
SEPARATOR = "-"


class IdentifierGenerator:
    """
    Produces one candidate identifier per call.

    The underlying ``random.Random`` is seeded from OS entropy once, when the
    generator is built; build one generator per run and reuse it.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random(random.SystemRandom().getrandbits(256))

    def _group(self, length: int) -> str:
        return "".join(self._rng.choices(ALPHABET, k=length))

    def generate(self) -> str:
        return SEPARATOR.join(self._group(length) for length in GROUP_LENGTHS)
