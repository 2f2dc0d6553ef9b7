from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .config import HashConfig
from .errors import Sha2Error
from .integrity import hash_stream
from .log import configure_logging, get_logger

logger = get_logger("sha2stream.cli")


def _config_from_args(args: argparse.Namespace) -> HashConfig:
    return HashConfig.from_env(
        variant=args.bits,
        chunk_size=args.chunk_size,
        log_level=args.log_level,
        json_logs=True if args.json_logs else None,
    )


def _digest_path(name: str, cfg: HashConfig) -> Tuple[str, int]:
    """Return the hex digest and the variant that actually produced it."""
    ctx = cfg.new_context()
    if name == "-":
        return hash_stream(sys.stdin.buffer, ctx, cfg.chunk_size).hex(), ctx.variant
    with Path(name).open("rb") as fh:
        return hash_stream(fh, ctx, cfg.chunk_size).hex(), ctx.variant


def cmd_hash(args: argparse.Namespace) -> int:
    cfg = _config_from_args(args)
    configure_logging(cfg.log_level, use_json=cfg.json_logs)

    rc = 0
    for name in args.files or ["-"]:
        try:
            hex_digest, variant = _digest_path(name, cfg)
        except OSError as e:
            logger.error("Cannot read %s: %s", name, e)
            rc = 1
            continue
        if args.json:
            print(json.dumps({"file": name, "algorithm": f"sha{variant}", "digest": hex_digest}))
        else:
            print(f"{hex_digest}  {name}")
    return rc


def cmd_check(args: argparse.Namespace) -> int:
    cfg = _config_from_args(args)
    configure_logging(cfg.log_level, use_json=cfg.json_logs)

    try:
        hex_digest, _ = _digest_path(args.file, cfg)
    except OSError as e:
        logger.error("Cannot read %s: %s", args.file, e)
        return 2

    if hex_digest == args.expected.strip().lower():
        print(f"{args.file}: OK")
        return 0
    print(f"{args.file}: FAILED")
    logger.info("Expected %s, computed %s", args.expected, hex_digest)
    return 1


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--bits", type=int, default=None, choices=(224, 256), help="Digest variant (default 256)")
    p.add_argument("--chunk-size", type=int, default=None, help="Read size in bytes")
    p.add_argument("--log-level", default=None, help="Override SHA2STREAM_LOG_LEVEL")
    p.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="sha2stream", description="Streaming SHA-256 / SHA-224 digests")
    sub = p.add_subparsers(dest="cmd", required=True)

    h = sub.add_parser("hash", help="Print digests of files (or stdin)")
    h.add_argument("files", nargs="*", help="Files to hash; '-' or none reads stdin")
    h.add_argument("--json", action="store_true", help="One JSON object per line")
    _add_common(h)
    h.set_defaults(func=cmd_hash)

    c = sub.add_parser("check", help="Compare a file's digest with an expected value")
    c.add_argument("file", help="File to hash; '-' reads stdin")
    c.add_argument("--expected", required=True, help="Expected hex digest")
    _add_common(c)
    c.set_defaults(func=cmd_check)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    try:
        rc = args.func(args)
    except Sha2Error as e:
        logger.error("%s", e)
        rc = 2
    except ValueError as e:
        p.error(str(e))
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
