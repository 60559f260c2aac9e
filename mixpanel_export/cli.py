"""Command-line interface that prints a signed export URL."""
from __future__ import annotations

import argparse
import json
import os
import sys

from .client import PRESETS, ExportClient
from .config import DEFAULT_CONFIG
from .models import CredentialUnavailable
from .security import KEY_FILE_ENV, SECRET_FILE_ENV


def _parse_param(value: str) -> tuple[str, str]:
    key, sep, rest = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {value!r}")
    return key, rest


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a signed analytics export URL")
    parser.add_argument("operation", choices=sorted(PRESETS), help="Endpoint preset to sign")
    parser.add_argument(
        "--key-file",
        default=os.getenv(KEY_FILE_ENV),
        help=f"File holding the API key (default: ${KEY_FILE_ENV})",
    )
    parser.add_argument(
        "--secret-file",
        default=os.getenv(SECRET_FILE_ENV),
        help=f"File holding the API secret (default: ${SECRET_FILE_ENV})",
    )
    parser.add_argument(
        "--param",
        action="append",
        type=_parse_param,
        default=[],
        metavar="KEY=VALUE",
        help="Endpoint parameter, repeatable (e.g. --param from_date=2024-01-01)",
    )
    parser.add_argument("--expiry", type=int, default=None, help="Signature lifetime in seconds (default: 600)")
    parser.add_argument("--escape", action="store_true", help="Percent-encode query keys and values")
    parser.add_argument("--json", action="store_true", help="Print expire, signature and url as JSON")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    if not args.key_file or not args.secret_file:
        print(
            f"Both --key-file and --secret-file (or {KEY_FILE_ENV}/{SECRET_FILE_ENV}) are required",
            file=sys.stderr,
        )
        raise SystemExit(1)
    client = ExportClient(DEFAULT_CONFIG.with_escaping(args.escape))
    try:
        client.configure_auth(args.key_file, args.secret_file)
    except CredentialUnavailable as exc:
        print(f"Failed to load credentials: {exc}", file=sys.stderr)
        raise SystemExit(1)

    signed = client.create_preset(args.operation, dict(args.param), expiry_seconds=args.expiry)
    if args.json:
        print(json.dumps(signed.to_dict(), indent=2))
    else:
        print(signed.url)


if __name__ == "__main__":  # pragma: no cover
    main()
