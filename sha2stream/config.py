from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional
import os

from .constants import DEFAULT_VARIANT
from .context import Sha2Context

ENV_PREFIX = "SHA2STREAM_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class HashConfig:
    variant: int = DEFAULT_VARIANT
    chunk_size: int = 64 * 1024  # read size for files/streams
    max_update_size: Optional[int] = None  # None = unbounded
    strict_variant: bool = False

    # Logging
    log_level: str = "WARNING"
    json_logs: bool = False

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.max_update_size is not None and self.max_update_size <= 0:
            raise ValueError(f"max_update_size must be positive, got {self.max_update_size}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "HashConfig":
        """Build a config from SHA2STREAM_* variables; keyword overrides win."""
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}
        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is not None:
                data[f.name] = _coerce(f.name, raw)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)

    def new_context(self) -> Sha2Context:
        ctx = Sha2Context(max_update_size=self.max_update_size)
        ctx.init(self.variant, strict=self.strict_variant)
        return ctx


def _coerce(name: str, raw: str) -> Any:
    value = raw.strip()
    if name in ("variant", "chunk_size"):
        return _to_int(name, value)
    if name == "max_update_size":
        return None if value.lower() in ("", "none") else _to_int(name, value)
    if name in ("strict_variant", "json_logs"):
        lowered = value.lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        raise ValueError(f"{ENV_PREFIX}{name.upper()} must be a boolean, got {raw!r}")
    return value


def _to_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name.upper()} must be an integer, got {value!r}") from None
