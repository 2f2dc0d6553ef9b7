from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import binascii
import struct

from .constants import BLOCK_SIZE, LENGTH_MASK, SHA224_DIGEST_SIZE, SHA256_DIGEST_SIZE, WORD_MASK
from .errors import StateDecodeError

# Serialized context state, so a half-hashed stream can be parked and resumed:
# - a frozen dataclass mirroring the context fields
# - a binary codec with an explicit big-endian layout
# - optional CRC32 over everything before it

MAGIC_STATE = 0x53484132  # 'SHA2'
VERSION_V1 = 0x0001

_HEADER = struct.Struct(">IH")
_BODY = struct.Struct(">64sQ8II")
_CRC = struct.Struct(">I")

# Size of the raw context fields (buffer, length, state words, digest length).
STATE_SIZE = _BODY.size


@dataclass(frozen=True)
class ContextSnapshot:
    """
    Point-in-time copy of a hashing context.

    `buffer` always holds 64 bytes; only the first `total_length % 64` are
    message data.
    """
    buffer: bytes
    total_length: int
    state: Tuple[int, ...]
    digest_length: int

    @property
    def pending(self) -> int:
        return self.total_length % BLOCK_SIZE


def check_snapshot(snapshot: ContextSnapshot) -> None:
    """Reject a snapshot that cannot be loaded into a context."""
    if len(snapshot.buffer) != BLOCK_SIZE:
        raise StateDecodeError(f"Snapshot buffer must be {BLOCK_SIZE} bytes, got {len(snapshot.buffer)}")
    if len(snapshot.state) != 8:
        raise StateDecodeError(f"Snapshot state must have 8 words, got {len(snapshot.state)}")
    if not all(isinstance(w, int) and 0 <= w <= WORD_MASK for w in snapshot.state):
        raise StateDecodeError("Snapshot state words must be 32-bit unsigned integers")
    if snapshot.total_length < 0:
        raise StateDecodeError(f"Bad total length: {snapshot.total_length}")
    if snapshot.digest_length not in (SHA224_DIGEST_SIZE, SHA256_DIGEST_SIZE):
        raise StateDecodeError(f"Bad digest length: {snapshot.digest_length}")


def encode_state(snapshot: ContextSnapshot, include_crc32: bool = True) -> bytes:
    """
    Layout (big-endian):
      uint32 magic
      uint16 version
      64s    buffer
      uint64 total_length
      8 * uint32 state
      uint32 digest_length
      uint32 crc32   (optional)
    """
    if len(snapshot.buffer) != BLOCK_SIZE:
        raise ValueError(f"Snapshot buffer must be {BLOCK_SIZE} bytes, got {len(snapshot.buffer)}")
    if len(snapshot.state) != 8:
        raise ValueError(f"Snapshot state must have 8 words, got {len(snapshot.state)}")

    payload = _HEADER.pack(MAGIC_STATE, VERSION_V1) + _BODY.pack(
        bytes(snapshot.buffer),
        snapshot.total_length & LENGTH_MASK,
        *snapshot.state,
        snapshot.digest_length,
    )
    if include_crc32:
        payload += _CRC.pack(binascii.crc32(payload) & 0xFFFFFFFF)
    return payload


def decode_state(buf: bytes, require_crc32: bool = False) -> ContextSnapshot:
    """
    Decode bytes produced by `encode_state`.

    The crc32 trailer is checked whenever it is present; `require_crc32=True`
    additionally rejects input without one.
    """
    mv = memoryview(buf)
    bare = _HEADER.size + _BODY.size
    if len(mv) == bare:
        if require_crc32:
            raise StateDecodeError("Missing crc32")
    elif len(mv) == bare + _CRC.size:
        (crc32,) = _CRC.unpack(mv[bare:])
        computed = binascii.crc32(mv[:bare]) & 0xFFFFFFFF
        if crc32 != computed:
            raise StateDecodeError(f"CRC32 mismatch: got {crc32:#x}, computed {computed:#x}")
    else:
        raise StateDecodeError(f"Bad state length: {len(mv)} bytes")

    magic, version = _HEADER.unpack(mv[: _HEADER.size])
    if magic != MAGIC_STATE:
        raise StateDecodeError(f"Bad magic: {magic:#x}")
    if version != VERSION_V1:
        raise StateDecodeError(f"Unsupported version: {version:#x}")

    fields = _BODY.unpack(mv[_HEADER.size : bare])
    buffer, total_length = fields[0], fields[1]
    state = tuple(fields[2:10])
    digest_length = fields[10]
    if digest_length not in (SHA224_DIGEST_SIZE, SHA256_DIGEST_SIZE):
        raise StateDecodeError(f"Bad digest length: {digest_length}")

    return ContextSnapshot(
        buffer=buffer,
        total_length=total_length,
        state=state,
        digest_length=digest_length,
    )
