"""
keyuri – command-line entry point.

Usage
-----
    python main.py parse "otpauth://totp/Example:alice?secret=JBSWY3DPEHPK3PXP"
    python main.py build --secret JBSWY3DPEHPK3PXP --label alice --issuer Example

Or, if installed as a package:
    keyuri parse ...
"""

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import List, Optional

from core.base32 import has_invalid_padding, is_base32
from keyuri.parser import (
    DEFAULT_DIGITS,
    DEFAULT_PERIOD,
    Algorithm,
    InvalidUriError,
    OtpUriRecord,
    build_key_uri,
    parse_key_uri,
)

logger = logging.getLogger("keyuri")

EXIT_OK = 0
EXIT_INVALID = 1

LOG_LEVEL_ENV = "KEYURI_LOG_LEVEL"


# ── Logging setup ─────────────────────────────────────────────────────────────

def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING")
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


# ── Commands ──────────────────────────────────────────────────────────────────

def _cmd_parse(args: argparse.Namespace) -> int:
    record = parse_key_uri(args.uri)
    data = asdict(record)
    data["algorithm"] = record.algorithm.value
    if args.hide_secret:
        data["secret"] = "*" * len(record.secret)
    print(json.dumps(data, indent=2))
    return EXIT_OK


def _cmd_build(args: argparse.Namespace) -> int:
    if has_invalid_padding(args.secret) or not is_base32(args.secret):
        raise InvalidUriError("Secret is not valid base32.")
    record = OtpUriRecord(
        secret=args.secret.rstrip("="),
        label=args.label,
        issuer=args.issuer,
        algorithm=Algorithm(args.algorithm),
        digits=args.digits,
        period=args.period,
    )
    print(build_key_uri(record))
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="keyuri",
        description="Parse and build otpauth://totp key URIs.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Validate a URI and print it as JSON.")
    p_parse.add_argument("uri", help="otpauth:// URI to parse.")
    p_parse.add_argument(
        "--hide-secret", action="store_true", help="Mask the secret in the output."
    )
    p_parse.set_defaults(func=_cmd_parse)

    p_build = sub.add_parser("build", help="Print an otpauth:// URI.")
    p_build.add_argument("--secret", required=True, help="Base32 secret.")
    p_build.add_argument("--label", required=True, help="Account name.")
    p_build.add_argument("--issuer", default="", help="Issuer / service name.")
    p_build.add_argument(
        "--algorithm",
        choices=[alg.value for alg in Algorithm],
        default=Algorithm.SHA1.value,
    )
    p_build.add_argument("--digits", type=int, default=DEFAULT_DIGITS)
    p_build.add_argument("--period", type=int, default=DEFAULT_PERIOD)
    p_build.set_defaults(func=_cmd_build)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        return args.func(args)
    except InvalidUriError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc.reason}", file=sys.stderr)
        return EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
