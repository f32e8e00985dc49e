"""Command-line interface for the emergency_feed application."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pprint
from pathlib import Path
from typing import List, Optional

from .classifier import RULE_PRESETS
from .config import AppConfig, build_pipeline_config, parse_app_config
from .pipeline import OUTPUT_FORMATS, execute

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""
    parser = argparse.ArgumentParser(
        description="Fetch and classify emergency-dispatch announcements."
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to the configuration XML file. Built-in defaults when omitted.",
    )

    # Overrides for logging/debugging
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING). Overrides config.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional path to a log file. Overrides config.",
    )

    parser.add_argument(
        "--variant",
        choices=sorted(RULE_PRESETS),
        default=None,
        help="Classifier rule preset. Overrides config.",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Output format written to stdout. Overrides config.",
    )
    parser.add_argument(
        "--feed-file",
        metavar="PATH",
        help="Read the RSS document from PATH instead of downloading it.",
    )
    parser.add_argument(
        "--save-announcements",
        metavar="PATH",
        help="Write the classified announcements to PATH as JSON.",
    )

    return parser


def configure_logging(level_name: str, log_file: Optional[str] = None) -> None:
    """Initialise logging according to options."""
    log_level = getattr(logging, level_name.upper(), None)
    if not isinstance(log_level, int):
        raise ValueError(f"Unsupported log level: {level_name}")

    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    root_logger.addHandler(stream_handler)

    if log_file:
        log_path = Path(log_file)
        if log_path.parent and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.debug(
            "Logger initialised with level %s and file output to %s",
            level_name.upper(),
            log_path,
        )
    else:
        logger.debug(
            "Logger initialised with console output at level %s", level_name.upper()
        )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        app_config = parse_app_config(args.config) if args.config else AppConfig()

        # CLI overrides config
        log_level = args.log_level or app_config.logging.level
        log_file = args.log_file or app_config.logging.file
        configure_logging(log_level, log_file)

        if args.variant:
            app_config.variant = args.variant
        if args.output_format:
            app_config.output_format = args.output_format

        config = build_pipeline_config(
            app_config,
            feed_file=args.feed_file,
            save_path=args.save_announcements,
        )
        logger.debug(
            "Active Configuration:\n%s", pprint.pformat(dataclasses.asdict(config))
        )

        result = execute(config)
    except ValueError as exc:
        parser.error(str(exc))
    except (RuntimeError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 1
    except Exception:  # noqa: BLE001
        logger.exception("Unexpected error during execution.")
        return 1

    print(result.output_text)
    return 0
