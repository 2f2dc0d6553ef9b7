"""Exceptions raised for misuse of a hashing context.

All of them derive from ``ValueError`` so callers already catching the codec
errors of this package keep working.
"""

from __future__ import annotations


class Sha2Error(ValueError):
    """Base class for sha2stream errors."""


class InvalidVariantError(Sha2Error):
    def __init__(self, variant: object) -> None:
        super().__init__(f"Unsupported variant: {variant!r} (expected 224 or 256)")
        self.variant = variant


class ContextFinalizedError(Sha2Error):
    def __init__(self, operation: str) -> None:
        super().__init__(f"Context already finalized; call init() before {operation}()")
        self.operation = operation


class InputTooLargeError(Sha2Error):
    def __init__(self, size: int, capacity: int) -> None:
        super().__init__(f"Input of {size} bytes exceeds transfer capacity of {capacity} bytes")
        self.size = size
        self.capacity = capacity


class StateDecodeError(Sha2Error):
    """Serialized context state is malformed."""
