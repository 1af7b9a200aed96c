"""
Post a "pull request ready for review" message to a Slack webhook.

All message content comes from CI environment variables (SLACK_WEBHOOK,
SLACK_MESSAGE, PR_TITLE, PR_BODY, GITHUB_* ...). Options only tune delivery.

Example:
    python -m prready --mentions configs/mentions.yaml -v

Exit codes:
    0  message delivered (or printed with --dry-run)
    1  missing/invalid configuration (webhook URL, message, mention file)
    2  delivery failure (network error or non-2xx response)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Mapping, Optional

import yaml  # for catching yaml.YAMLError from prready.config.load_mentions

from .config import DEFAULT_MENTIONS, ConfigError, EnvSnapshot, MentionTable, Settings, load_mentions
from .logging import LEVEL_CHOICES, get_logger, set_verbosity, setup_logging
from .notify import DeliveryError, send
from .payload import build_message

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_DELIVERY = 2


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="prready",
        description="Notify a Slack webhook that a pull request is ready for review",
    )
    parser.add_argument(
        "--mentions",
        type=Path,
        default=None,
        help="YAML mention table (default: SLACK_MENTIONS_FILE or the built-in table)",
    )
    parser.add_argument(
        "--with-attachment",
        action="store_true",
        help="Also send the display fields as a colored attachment (or MSG_ATTACHMENT=true)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the JSON payload instead of sending it",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Request timeout in seconds (default: no explicit timeout)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-level",
        choices=LEVEL_CHOICES,
        default=None,
        help="Explicit log level (overrides -v and LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def _fail(message: str, code: int) -> int:
    print(message, file=sys.stderr)
    return code


def _mention_table(args: argparse.Namespace, settings: Settings) -> MentionTable:
    path = args.mentions or (Path(settings.mentions_file) if settings.mentions_file else None)
    if path is None:
        return DEFAULT_MENTIONS
    return load_mentions(path)


def main(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> int:
    """Program entrypoint. Returns an exit code per the module docstring."""
    args = parse_args(argv)

    setup_logging(level=args.log_level)
    if args.log_level is None:
        set_verbosity(args.verbose)
    log = get_logger(__name__)

    settings = Settings.from_env(EnvSnapshot(environ))
    try:
        settings.validate()
        mentions = _mention_table(args, settings)
    except ConfigError as e:
        return _fail(str(e), EXIT_CONFIG)
    except FileNotFoundError as e:
        return _fail(str(e), EXIT_CONFIG)
    except yaml.YAMLError as e:
        return _fail(f"Mention file parse error: {e}", EXIT_CONFIG)

    log.debug("Using %r", mentions)
    msg = build_message(
        settings,
        mentions,
        attach_fields=args.with_attachment or settings.attach_fields,
    )

    if args.dry_run:
        print(msg.to_json(indent=2))
        return EXIT_OK

    print(f"Sending message to {settings.webhook_url}")
    print(f"Message: {settings.message}")

    try:
        status = send(settings.webhook_url, msg, timeout=args.timeout)
    except DeliveryError as e:
        return _fail(f"Error sending message: {e}", EXIT_DELIVERY)

    print(status)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
