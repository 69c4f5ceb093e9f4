"""Command-line entry point that prints one signed app JWT."""

import argparse
import json
import logging
import os
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from appjwt.core.log import configure_logging
from appjwt.core.settings import LOG_LEVEL_DEFAULT, load_settings
from appjwt.crypto.clock import fixed_clock, system_clock
from appjwt.crypto.errors import TokenIssuanceError
from appjwt.crypto.issuer import TokenIssuer
from appjwt.crypto.keys import KeySource
from appjwt.crypto.types import IssuedToken

STDIN_MARKER = "-"
DISTRIBUTION_NAME = "appjwt"

logger = logging.getLogger(__name__)


def _version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="appjwt",
        description="Issue a short-lived RS256 JWT for app authentication",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML config file with private_key_file, issuer_id, lifetime_seconds",
    )
    parser.add_argument(
        "--key-file",
        dest="private_key_file",
        help="PEM-encoded RSA private key ('-' reads stdin)",
    )
    parser.add_argument(
        "--issuer",
        dest="issuer_id",
        help="issuer identity placed in the iss claim (e.g. the app ID)",
    )
    parser.add_argument(
        "--lifetime",
        dest="lifetime_seconds",
        type=int,
        help="token lifetime in seconds (at most 600)",
    )
    parser.add_argument(
        "--now",
        type=int,
        help="issue the token as of this epoch second instead of the current time",
    )
    parser.add_argument(
        "--format",
        choices=["raw", "json"],
        default="raw",
        help="print the bare token or a JSON document",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="write to this file instead of stdout",
    )
    parser.add_argument("--log-level", help="log level (default WARNING)")
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_version()}",
    )
    return parser


def _key_source(private_key_file: Path) -> KeySource:
    if str(private_key_file) == STDIN_MARKER:
        return sys.stdin.buffer if hasattr(sys.stdin, "buffer") else sys.stdin
    return private_key_file


def _render(issued: IssuedToken, output_format: str) -> str:
    if output_format == "json":
        return json.dumps(issued.to_output())
    return issued.token


def _write(text: str, output: Path | None) -> None:
    if output is None:
        try:
            sys.stdout.write(text + "\n")
            sys.stdout.flush()
        except OSError as exc:
            raise TokenIssuanceError(f"could not write token to stdout: {exc}") from exc
        return
    try:
        with open(output, "w", encoding="utf-8") as out_file:
            out_file.write(text + "\n")
    except OSError as exc:
        raise TokenIssuanceError(f"could not write {output}: {exc}") from exc
    logger.info("Wrote token to %s", output)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    args = build_parser().parse_args(argv)
    try:
        configure_logging(
            args.log_level or os.environ.get("APPJWT_LOG_LEVEL", LOG_LEVEL_DEFAULT)
        )
        logger.info("Build info: appjwt %s", _version())
        settings = load_settings(
            args.config,
            overrides={
                "private_key_file": args.private_key_file,
                "issuer_id": args.issuer_id,
                "lifetime_seconds": args.lifetime_seconds,
                "log_level": args.log_level,
            },
        )
        configure_logging(settings.log_level)
        clock = system_clock if args.now is None else fixed_clock(args.now)
        issuer = TokenIssuer(settings.to_issuer_config(), clock=clock)
        issued = issuer.issue(_key_source(settings.require_private_key_file()))
        _write(_render(issued, args.format), args.output)
    except TokenIssuanceError as exc:
        logger.debug("Token issuance failed", exc_info=True)
        print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
        return exc.exit_code
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
