from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

from refreshing_cache.cache import RefreshingCache
from refreshing_cache.clock import MonotonicClock
from refreshing_cache.config import CacheConfig, load_config
from refreshing_cache.http import FetchError, HttpBackingService

MAX_VALUE_CHARS = 200


def _format_value(value: str) -> str:
    collapsed = " ".join(value.split())
    if len(collapsed) > MAX_VALUE_CHARS:
        collapsed = collapsed[:MAX_VALUE_CHARS].rstrip()
    return collapsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Read keys through a refreshing cache backed by an HTTP endpoint."
    )
    parser.add_argument("url_template", help="URL with a {key} placeholder")
    parser.add_argument("keys", nargs="+", help="Keys to read, in order")
    parser.add_argument("--ttl", type=float, help="Entry time-to-live in seconds")
    parser.add_argument("--max-size", type=int, help="Maximum resident entries")
    parser.add_argument("--config", type=Path, help="Path to a JSON config file")
    parser.add_argument("--verbose", action="store_true", help="Log cache activity")
    return parser


def _resolve_config(args: argparse.Namespace) -> CacheConfig:
    loaded = load_config(args.config)
    return CacheConfig(
        ttl_seconds=args.ttl if args.ttl is not None else loaded.ttl_seconds,
        max_size=args.max_size if args.max_size is not None else loaded.max_size,
    )


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        config = _resolve_config(args)
        service = HttpBackingService(args.url_template)
    except ValueError as exc:
        parser.error(str(exc))
    cache: RefreshingCache[str, str] = RefreshingCache(service, MonotonicClock(), config)
    status = 0
    for key in args.keys:
        try:
            value = cache.get(key)
        except FetchError as exc:
            print(f"{key}: {exc}", file=sys.stderr)
            status = 1
            continue
        print(f"{key}: {_format_value(value)}")
    return status


if __name__ == "__main__":
    sys.exit(main())
