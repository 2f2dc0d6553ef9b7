from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .constants import BLOCK_SIZE, ROUND_CONSTANTS, WORD_MASK

# Block words are big-endian uint32, regardless of host byte order.
_BLOCK_DTYPE = np.dtype(">u4")


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & WORD_MASK


def big_sigma0(x: int) -> int:
    return _rotr(x, 2) ^ _rotr(x, 13) ^ _rotr(x, 22)


def big_sigma1(x: int) -> int:
    return _rotr(x, 6) ^ _rotr(x, 11) ^ _rotr(x, 25)


def small_sigma0(x: int) -> int:
    return _rotr(x, 7) ^ _rotr(x, 18) ^ (x >> 3)


def small_sigma1(x: int) -> int:
    return _rotr(x, 17) ^ _rotr(x, 19) ^ (x >> 10)


def ch(x: int, y: int, z: int) -> int:
    return (x & y) ^ (~x & z & WORD_MASK)


def maj(x: int, y: int, z: int) -> int:
    return (x & y) ^ (x & z) ^ (y & z)


def block_words(block: bytes) -> List[int]:
    """Decode a 64-byte block into sixteen big-endian 32-bit words."""
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"Block must be {BLOCK_SIZE} bytes, got {len(block)}")
    return np.frombuffer(block, dtype=_BLOCK_DTYPE).tolist()


def message_schedule(words: Sequence[int]) -> List[int]:
    """Expand 16 block words into the 64-word message schedule."""
    w = list(words)
    for n in range(16, 64):
        w.append((small_sigma1(w[n - 2]) + w[n - 7] + small_sigma0(w[n - 15]) + w[n - 16]) & WORD_MASK)
    return w


def compress(state: Sequence[int], block: bytes) -> Tuple[int, ...]:
    """
    Run the SHA-256 compression function (FIPS 180-4, 6.2.2) over one block.

    `state` is eight 32-bit words and is left untouched; the updated state is
    returned. `block` must be exactly 64 bytes (any bytes-like object).
    """
    w = message_schedule(block_words(block))

    a, b, c, d, e, f, g, h = state
    for r in range(64):
        t1 = (h + big_sigma1(e) + ch(e, f, g) + ROUND_CONSTANTS[r] + w[r]) & WORD_MASK
        t2 = (big_sigma0(a) + maj(a, b, c)) & WORD_MASK
        h, g, f, e = g, f, e, (d + t1) & WORD_MASK
        d, c, b, a = c, b, a, (t1 + t2) & WORD_MASK

    return tuple((x + y) & WORD_MASK for x, y in zip(state, (a, b, c, d, e, f, g, h)))


def state_bytes(state: Sequence[int]) -> bytes:
    """Encode state words as big-endian bytes."""
    return np.asarray(state, dtype=_BLOCK_DTYPE).tobytes()
