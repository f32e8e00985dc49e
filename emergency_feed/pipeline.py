"""High-level orchestration for the emergency_feed application."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .classifier import APP_RULES, ClassifierRules, classify
from .feeds import FEED_URL, fetch_feed, parse_feed
from .models import Announcement
from .renderers import build_announcements_text

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "text")


@dataclass
class PipelineConfig:
    """Runtime options for one pipeline invocation."""

    feed_url: str = FEED_URL
    timeout: Optional[float] = None
    rules: ClassifierRules = field(default_factory=lambda: APP_RULES)
    strip_html: bool = False
    feed_file: Optional[str] = None
    save_path: Optional[str] = None
    output_format: str = "json"


@dataclass
class RunResult:
    """Returned data after executing the app."""

    output_text: str
    announcements: List[Announcement]


def _load_feed_from_file(path: str) -> bytes:
    location = Path(path)
    try:
        content = location.read_bytes()
    except FileNotFoundError as exc:
        raise RuntimeError(f"Feed snapshot not found: {location}") from exc
    logger.info("Loaded %d bytes of feed data from %s", len(content), location)
    return content


def _save_announcements_to_file(path: str, announcements: List[Announcement]) -> None:
    location = Path(path)
    if location.parent and not location.parent.exists():
        location.parent.mkdir(parents=True, exist_ok=True)

    serialisable = [announcement.to_dict() for announcement in announcements]
    location.write_text(
        json.dumps(serialisable, indent=2, ensure_ascii=False), encoding="utf-8"
    )
    logger.info("Saved %d announcements to %s", len(serialisable), location)


def collect_announcements(config: PipelineConfig) -> List[Announcement]:
    """Fetch, parse and classify the feed, preserving item order."""
    if config.feed_file:
        content = _load_feed_from_file(config.feed_file)
    else:
        content = fetch_feed(config.feed_url, timeout=config.timeout)

    items = parse_feed(content, strip_html=config.strip_html)
    announcements = [classify(item, config.rules) for item in items]
    logger.info("Classified %d announcements", len(announcements))
    return announcements


def execute(config: PipelineConfig) -> RunResult:
    """Run the pipeline and render the result payload."""
    if config.output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {config.output_format}")

    announcements = collect_announcements(config)

    if config.save_path:
        _save_announcements_to_file(config.save_path, announcements)

    if config.output_format == "text":
        output_text = build_announcements_text(announcements)
    else:
        output_text = json.dumps(
            [announcement.to_dict() for announcement in announcements],
            indent=2,
            ensure_ascii=False,
        )

    return RunResult(output_text=output_text, announcements=announcements)
