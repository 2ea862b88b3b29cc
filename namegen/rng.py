#!/usr/bin/env python3
"""
Seeded Random Number Generator
==============================
Deterministic pseudo-random source for pattern generation.

The generator is a 32-bit xorshift (Marsaglia, shifts 13/17/5). Seeds are
reduced modulo 2**32 and scrambled with the MurmurHash3 finalizer so that
neighbouring seeds (1, 2, 3, ...) start from unrelated states.

Range reduction:
- token choice:        draw % count
- alternative accept:  draw < RNG_MAX // n

Identical seeds always yield identical draw sequences.
"""

import hashlib
import os
import time

MASK_32 = 0xFFFFFFFF
RNG_MAX = MASK_32

# xorshift has 0 as a fixed point and so does the finalizer, which is a
# bijection on 32-bit values. Seed 0 is therefore folded onto this seed
# before mixing, and the two share one stream.
ZERO_SEED_ALIAS = MASK_32


def mix_seed(seed: int) -> int:
    """
    Scramble a seed into a non-zero 32-bit xorshift state.

    Every reduced seed gets its own state except 0, which gives the same
    state as 0xFFFFFFFF.
    """
    if seed < 0:
        raise ValueError(f"seed must be a non-negative integer, got {seed}")
    h = (seed & MASK_32) or ZERO_SEED_ALIAS
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & MASK_32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & MASK_32
    h ^= h >> 16
    return h


class XorShift32:
    """
    32-bit xorshift generator.

    Usage:
        rng = XorShift32(seed=42)
        index = rng.below(len(candidates))
        if rng.accept(n):
            ...
    """

    def __init__(self, seed: int = 0):
        self.state = mix_seed(seed)

    def next(self) -> int:
        """Advance the state and return it (0 < value <= RNG_MAX)."""
        x = self.state
        x ^= (x << 13) & MASK_32
        x ^= x >> 17
        x ^= (x << 5) & MASK_32
        self.state = x
        return x

    def below(self, count: int) -> int:
        """Return an index in [0, count)."""
        if count <= 0:
            raise ValueError("count must be positive")
        return self.next() % count

    def accept(self, n: int) -> bool:
        """Return True with probability ~1/n (reservoir sampling step)."""
        return self.next() < RNG_MAX // n


def random_seed() -> int:
    """Fresh 32-bit seed from system entropy, time and PID."""
    hw_entropy = int.from_bytes(os.urandom(8), 'big')
    combined = hw_entropy ^ time.time_ns() ^ (os.getpid() << 32)
    digest = hashlib.sha256(combined.to_bytes(32, 'big')).digest()
    return int.from_bytes(digest[:4], 'big')
