"""Command-line interface for a11ydriver.

Provides quick checks of the host (which screen readers can be driven)
and small drivers for trying a screen reader session by hand.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

READERS = ("voiceover", "nvda")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="a11ydriver",
        description="Screen reader automation for accessibility testing",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/a11ydriver.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("detect", help="Report which screen readers this host supports")

    probe_parser = subparsers.add_parser(
        "probe", help="Start a session, move through N items and print what was spoken",
    )
    probe_parser.add_argument("--reader", choices=READERS, required=True)
    probe_parser.add_argument(
        "--steps", type=int, default=5,
        help="Number of times to move to the next item",
    )

    script_parser = subparsers.add_parser(
        "run-script", help="Run a YAML list of commands and print what each one caused",
    )
    script_parser.add_argument("script", type=Path, help="YAML file with a list of commands")
    script_parser.add_argument("--reader", choices=READERS, required=True)
    script_parser.add_argument(
        "--no-capture", action="store_true",
        help="Issue the commands without waiting for speech",
    )

    return parser.parse_args(argv)


def _create_reader(name: str, settings):
    if name == "voiceover":
        from a11ydriver.voiceover.session import VoiceOver
        return VoiceOver(settings)
    from a11ydriver.nvda.session import NVDA
    return NVDA(settings)


def load_script(path: Path) -> list:
    """Load a list of commands from a YAML file.

    Each item is a mapping with a ``kind`` of ``key_press``,
    ``text_typing``, ``keyboard_command``, ``commander_command`` or
    ``mouse_click`` plus that command's fields.
    """
    import yaml
    from pydantic import TypeAdapter

    from a11ydriver.domain.models import Command

    with open(path) as f:
        data = yaml.safe_load(f) or []
    return TypeAdapter(list[Command]).validate_python(data)


async def _detect(settings) -> None:
    for name in READERS:
        reader = _create_reader(name, settings)
        supported = await reader.detect()
        default = await reader.default()
        print(f"{reader.name:<10} supported={supported} default={default}")


async def _probe(settings, reader_name: str, steps: int) -> None:
    from a11ydriver.domain.models import CommandOptions

    reader = _create_reader(reader_name, settings)
    async with reader:
        for step in range(1, steps + 1):
            result = await reader.next(CommandOptions(capture=True))
            print(f"[{step}] {' | '.join(result.phrases) or '(silent)'}")


async def _run_script(settings, reader_name: str, path: Path, capture: bool) -> None:
    from a11ydriver.domain.models import CommandOptions

    commands = load_script(path)
    logger.info("Loaded %d commands from %s", len(commands), path)
    reader = _create_reader(reader_name, settings)
    async with reader:
        for index, command in enumerate(commands, 1):
            result = await reader.execute(command, CommandOptions(capture=capture))
            spoken = " | ".join(result.phrases) if capture else "-"
            print(f"[{index}] {command.kind}: {spoken or '(silent)'}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the a11ydriver CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from a11ydriver.config.settings import load_settings
    from a11ydriver.session.base import ScreenReaderError
    from a11ydriver.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    try:
        if args.command == "detect":
            asyncio.run(_detect(settings))

        elif args.command == "probe":
            logger.info("Probing %s for %d steps", args.reader, args.steps)
            asyncio.run(_probe(settings, args.reader, args.steps))

        elif args.command == "run-script":
            asyncio.run(_run_script(settings, args.reader, args.script, not args.no_capture))

    except ScreenReaderError as e:
        logger.error("%s (%s)", e, e.kind)
        sys.exit(1)


if __name__ == "__main__":
    main()
