# src/main.py — v2
"""CLI entry point with test and path commands.

Usage:
    mellivora-logger test [--channel C] [--level L] [--message M]
    mellivora-logger path <channel> [--handler NAME]

Both commands accept ``--config FILE`` (JSON) and ``--root DIR``; without
them the environment settings and the stock configuration apply.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from mellivora_logger.version import __version__

logger = logging.getLogger(__name__)

TEST_CHANNELS: tuple[str, ...] = ("app", "api", "queue", "database", "security")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="mellivora-logger",
        description=f"mellivora-logger v{__version__}: channel-based logging",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None,
        help="JSON logger configuration (default: MELLIVORA_LOGGER_CONFIG_FILE or stock config)",
    )
    parser.add_argument(
        "--root", type=Path, default=None,
        help="Root directory for relative log filenames",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- test ---
    p_test = subparsers.add_parser(
        "test", help="Write sample records through the configured loggers",
    )
    p_test.add_argument("--channel", default=None, help="Channel to log to")
    p_test.add_argument("--level", default="info", help="Level of the first record")
    p_test.add_argument("--message", default="Test message", help="Message of the first record")
    p_test.set_defaults(func=_cmd_test)

    # --- path ---
    p_path = subparsers.add_parser(
        "path", help="Print the file a channel currently writes to",
    )
    p_path.add_argument("channel", help="Channel name")
    p_path.add_argument(
        "--handler", default=None,
        help="Handler name to inspect (default: every file handler of the channel)",
    )
    p_path.set_defaults(func=_cmd_path)

    return parser


def _make_factory(args: argparse.Namespace):
    from mellivora_logger.config.settings import load_settings
    from mellivora_logger.factory.logger_factory import LoggerFactory

    overrides: dict[str, object] = {}
    if args.config is not None:
        overrides["config_file"] = args.config
    if args.root is not None:
        overrides["root_path"] = args.root
    return LoggerFactory.from_settings(load_settings(**overrides))


def _cmd_test(args: argparse.Namespace) -> int:
    """Exercise basic logging, every level, exception logging and several channels."""
    from mellivora_logger.facade import LogFacade

    factory = _make_factory(args)
    log = LogFacade(factory)
    failures = 0

    print("1. Basic logging")
    try:
        log.log_with(args.channel, args.level, args.message, {"test": "basic"})
        print(f"   ok: {args.level} -> {args.channel or factory.default}")
    except Exception as exc:
        failures += 1
        print(f"   failed: {exc}")

    print("2. All levels")
    for level in ("debug", "info", "warning", "error", "critical"):
        try:
            log.log_with(args.channel, level, f"{level.capitalize()} message", {"level_test": True})
            print(f"   ok: {level}")
        except Exception as exc:
            failures += 1
            print(f"   failed: {level}: {exc}")

    print("3. Exception logging")
    try:
        try:
            raise RuntimeError("Test exception for logging")
        except RuntimeError as exc:
            log.exception(exc, channel=args.channel)
        print("   ok: exception")
    except Exception as exc:
        failures += 1
        print(f"   failed: {exc}")

    print("4. Multiple channels")
    for channel in TEST_CHANNELS:
        try:
            log.info(f"Test message for {channel} channel", {"channel_test": True}, channel=channel)
            print(f"   ok: {channel}")
        except Exception as exc:
            failures += 1
            print(f"   failed: {channel}: {exc}")

    factory.close()
    return 1 if failures else 0


def _cmd_path(args: argparse.Namespace) -> int:
    """Print the resolved filename of each rotating file handler of a channel."""
    from mellivora_logger.handlers.named_rotating import NamedRotatingFileHandler

    factory = _make_factory(args)
    if args.handler is not None:
        handlers = list(factory.make(args.channel, [args.handler]).handlers)
    else:
        handlers = list(factory.get(args.channel).handlers)

    found = False
    for handler in handlers:
        if isinstance(handler, NamedRotatingFileHandler):
            print(handler.get_filename(args.channel))
            found = True
        handler.close()

    if not found:
        logger.error("Channel %r has no rotating file handler", args.channel)
        return 1
    return 0


def _setup_logging(verbose: bool) -> None:
    """Configure console logging for CLI usage."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


if __name__ == "__main__":
    sys.exit(main())
