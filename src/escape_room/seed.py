from __future__ import annotations

import hashlib
import random
from typing import Any, Optional


def derive_seed(source: str) -> int:
    """Derive a 32-bit integer seed from an arbitrary string using SHA256."""
    digest = hashlib.sha256(source.encode("utf-8")).digest()
    val = int.from_bytes(digest[:8], "big", signed=False)
    return val & 0xFFFFFFFF


def make_rng(seed: Optional[Any] = None) -> random.Random:
    """Return a dedicated RNG; never touches the global ``random`` state.

    Ints are used as-is (folded to 32 bits), anything else is hashed, and
    None seeds from system entropy.
    """
    rng = random.Random()
    if seed is None:
        rng.seed()
    elif isinstance(seed, int):
        rng.seed(seed & 0xFFFFFFFF)
    else:
        rng.seed(derive_seed(str(seed)))
    return rng
