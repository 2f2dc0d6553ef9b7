from __future__ import annotations

from typing import Optional, Tuple
import struct

from .compress import compress, state_bytes
from .constants import BLOCK_SIZE, DEFAULT_VARIANT, LENGTH_MASK, SHA224_DIGEST_SIZE, VARIANTS
from .errors import ContextFinalizedError, InputTooLargeError, InvalidVariantError
from .log import get_logger
from .state import ContextSnapshot, check_snapshot, decode_state, encode_state

logger = get_logger(__name__)

_BIT_LENGTH = struct.Struct(">Q")


class Sha2Context:
    """
    Streaming SHA-256 / SHA-224 computation.

    Feed message bytes with `update` in chunks of any size, then call
    `finalize` once to get the digest. The context only ever holds one
    partial block, so memory use does not grow with the message.

    A finalized context rejects further use until `init` is called again.
    `max_update_size` optionally bounds the size of a single `update` call.
    """

    def __init__(
        self,
        variant: int = DEFAULT_VARIANT,
        *,
        strict: bool = False,
        max_update_size: Optional[int] = None,
    ):
        self.max_update_size = max_update_size
        self.init(variant, strict=strict)

    def init(self, variant: int = DEFAULT_VARIANT, *, strict: bool = False) -> None:
        """
        Reset the context for `variant` (224 or 256).

        Unknown variants fall back to SHA-256 unless `strict` is set, in which
        case `InvalidVariantError` is raised and the context is left as it was.
        """
        if variant not in VARIANTS:
            if strict:
                raise InvalidVariantError(variant)
            logger.warning("Unknown variant %r, using SHA-%d", variant, DEFAULT_VARIANT)
            variant = DEFAULT_VARIANT

        iv, digest_length = VARIANTS[variant]
        self._state: Tuple[int, ...] = iv
        self._digest_length = digest_length
        self._total_length = 0
        self._buffer = bytearray(BLOCK_SIZE)
        self._finalized = False
        logger.debug("Initialized SHA-%d context", variant)

    @property
    def variant(self) -> int:
        return 224 if self._digest_length == SHA224_DIGEST_SIZE else 256

    @property
    def digest_length(self) -> int:
        return self._digest_length

    @property
    def total_length(self) -> int:
        return self._total_length

    @property
    def state(self) -> Tuple[int, ...]:
        return self._state

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def pending(self) -> bytes:
        """Buffered bytes not yet compressed; empty once finalized."""
        if self._finalized:
            return b""
        return bytes(self._buffer[: self._total_length % BLOCK_SIZE])

    def update(self, data) -> None:
        """Append `data` (any bytes-like object) to the message."""
        try:
            mv = memoryview(data).cast("B")
        except TypeError:
            raise TypeError(f"update() argument must be bytes-like, not {type(data).__name__}") from None
        self._check_open("update")

        size = len(mv)
        if self.max_update_size is not None and size > self.max_update_size:
            raise InputTooLargeError(size, self.max_update_size)

        index = self._total_length % BLOCK_SIZE
        self._total_length += size
        offset = 0

        # fill partial block
        if index:
            left = BLOCK_SIZE - index
            if size < left:
                self._buffer[index : index + size] = mv
                return
            self._buffer[index:] = mv[:left]
            self._state = compress(self._state, self._buffer)
            offset = left

        # whole blocks straight from the input
        while size - offset >= BLOCK_SIZE:
            self._state = compress(self._state, mv[offset : offset + BLOCK_SIZE])
            offset += BLOCK_SIZE

        if offset < size:
            self._buffer[: size - offset] = mv[offset:]

    def finalize(self) -> bytes:
        """Pad, compress the last block(s) and return the digest."""
        self._check_open("finalize")

        index = self._total_length % BLOCK_SIZE
        block = self._buffer
        block[index] = 0x80
        block[index + 1 :] = bytes(BLOCK_SIZE - index - 1)

        # no room left for the 64-bit length
        if index >= BLOCK_SIZE - _BIT_LENGTH.size:
            self._state = compress(self._state, block)
            block[:] = bytes(BLOCK_SIZE)

        block[BLOCK_SIZE - _BIT_LENGTH.size :] = _BIT_LENGTH.pack((self._total_length * 8) & LENGTH_MASK)
        self._state = compress(self._state, block)
        self._finalized = True

        logger.debug("Finalized SHA-%d context after %d bytes", self.variant, self._total_length)
        return state_bytes(self._state)[: self._digest_length]

    def copy(self) -> "Sha2Context":
        self._check_open("copy")
        other = Sha2Context.__new__(Sha2Context)
        other.max_update_size = self.max_update_size
        other._state = self._state
        other._digest_length = self._digest_length
        other._total_length = self._total_length
        other._buffer = bytearray(self._buffer)
        other._finalized = False
        return other

    def peek(self) -> bytes:
        """Digest of the message so far, leaving this context open."""
        self._check_open("peek")
        return self.copy().finalize()

    def snapshot(self) -> ContextSnapshot:
        self._check_open("snapshot")
        return ContextSnapshot(
            buffer=bytes(self._buffer),
            total_length=self._total_length,
            state=self._state,
            digest_length=self._digest_length,
        )

    def save_state(self, include_crc32: bool = True) -> bytes:
        return encode_state(self.snapshot(), include_crc32=include_crc32)

    @classmethod
    def from_snapshot(cls, snapshot: ContextSnapshot, *, max_update_size: Optional[int] = None) -> "Sha2Context":
        check_snapshot(snapshot)
        variant = 224 if snapshot.digest_length == SHA224_DIGEST_SIZE else 256
        ctx = cls(variant, max_update_size=max_update_size)
        ctx._state = tuple(snapshot.state)
        ctx._total_length = snapshot.total_length
        ctx._buffer = bytearray(snapshot.buffer)
        return ctx

    @classmethod
    def load_state(cls, buf: bytes, *, require_crc32: bool = False, max_update_size: Optional[int] = None) -> "Sha2Context":
        return cls.from_snapshot(decode_state(buf, require_crc32=require_crc32), max_update_size=max_update_size)

    def _check_open(self, operation: str) -> None:
        if self._finalized:
            raise ContextFinalizedError(operation)


def new(variant: int = DEFAULT_VARIANT, data: Optional[bytes] = None) -> Sha2Context:
    ctx = Sha2Context(variant)
    if data is not None:
        ctx.update(data)
    return ctx


def digest(data: bytes, variant: int = DEFAULT_VARIANT) -> bytes:
    return new(variant, data).finalize()


def hexdigest(data: bytes, variant: int = DEFAULT_VARIANT) -> str:
    return digest(data, variant).hex()


def sha256(data: bytes) -> bytes:
    return digest(data, 256)


def sha224(data: bytes) -> bytes:
    return digest(data, 224)
