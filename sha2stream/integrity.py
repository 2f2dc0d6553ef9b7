from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Iterable, Union

from .constants import DEFAULT_VARIANT
from .context import Sha2Context

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass
class RunningHash:
    """Accumulates chunks and can report the digest at any point."""

    variant: int = DEFAULT_VARIANT
    _ctx: Sha2Context = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._ctx = Sha2Context(self.variant)

    def update(self, chunk: bytes) -> None:
        self._ctx.update(chunk)

    def digest_bytes(self) -> bytes:
        return self._ctx.peek()

    def digest_hex(self) -> str:
        return self.digest_bytes().hex()

    @property
    def total_length(self) -> int:
        return self._ctx.total_length


def verify_running_hash(chunks: Iterable[bytes], expected_hex: str, variant: int = DEFAULT_VARIANT) -> bool:
    h = Sha2Context(variant)
    for chunk in chunks:
        h.update(chunk)
    return h.finalize().hex() == expected_hex.strip().lower()


def hash_stream(fh: BinaryIO, ctx: Sha2Context, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Read `fh` to EOF through `ctx` and return the digest."""
    for chunk in iter(lambda: fh.read(chunk_size), b""):
        ctx.update(chunk)
    return ctx.finalize()


def hash_file(path: Union[str, Path], variant: int = DEFAULT_VARIANT, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Return the hex digest of a file's contents."""
    with Path(path).open("rb") as fh:
        return hash_stream(fh, Sha2Context(variant), chunk_size).hex()
