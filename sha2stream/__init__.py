"""Streaming SHA-256 / SHA-224 (FIPS 180-4) in pure Python.

The engine (`Sha2Context`) holds at most one partial block, so messages can be
hashed in chunks of any size with bounded memory. Context state can be saved
and restored through a small binary codec.
"""

from .constants import BLOCK_SIZE, DEFAULT_TRANSFER_CAPACITY, SHA224_DIGEST_SIZE, SHA256_DIGEST_SIZE
from .compress import compress
from .context import Sha2Context, new, digest, hexdigest, sha224, sha256
from .errors import Sha2Error, InvalidVariantError, ContextFinalizedError, InputTooLargeError, StateDecodeError
from .state import STATE_SIZE, ContextSnapshot, encode_state, decode_state
from .integrity import RunningHash, verify_running_hash, hash_file
from .config import HashConfig

__version__ = "0.1.0"

__all__ = [
    "BLOCK_SIZE",
    "DEFAULT_TRANSFER_CAPACITY",
    "SHA224_DIGEST_SIZE",
    "SHA256_DIGEST_SIZE",
    "STATE_SIZE",
    "compress",
    "Sha2Context",
    "new",
    "digest",
    "hexdigest",
    "sha224",
    "sha256",
    "ContextSnapshot",
    "encode_state",
    "decode_state",
    "RunningHash",
    "verify_running_hash",
    "hash_file",
    "HashConfig",
    "Sha2Error",
    "InvalidVariantError",
    "ContextFinalizedError",
    "InputTooLargeError",
    "StateDecodeError",
]
