"""Configuration loading for the feed pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

from .classifier import RULE_PRESETS, ClassifierRules
from .feeds import FEED_URL
from .pipeline import OUTPUT_FORMATS, PipelineConfig

logger = logging.getLogger(__name__)


@dataclass
class ClassifierConfig:
    """Overrides applied on top of the selected rule preset."""

    normalize_date: Optional[bool] = None
    accessibility_label: Optional[bool] = None
    priority_case_sensitive: Optional[bool] = None
    type_case_sensitive: Optional[bool] = None


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class AppConfig:
    feed_url: str = FEED_URL
    timeout: Optional[float] = None
    variant: str = "app"
    strip_html: bool = False
    output_format: str = "json"
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the base config file if it's not absolute."""
    target = Path(target_path)
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _parse_flag(node: Optional[ET.Element], tag: str) -> Optional[bool]:
    if node is None:
        return None
    value = node.findtext(tag)
    if value is None or not value.strip():
        return None
    return value.strip().lower() == "true"


def parse_app_config(path: str) -> AppConfig:
    """Parse the application configuration XML."""
    config_path = Path(path).resolve()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    logger.info("Loading application configuration from %s", config_path)
    tree = ET.parse(config_path)
    root = tree.getroot()

    feed_url = (root.findtext("feed-url") or "").strip() or FEED_URL

    timeout_node = root.find("timeout")
    timeout = (
        float(timeout_node.text)
        if timeout_node is not None and timeout_node.text
        else None
    )

    variant = (root.findtext("variant") or "app").strip()
    if variant not in RULE_PRESETS:
        raise ValueError(f"Unknown classifier variant: {variant}")

    output_format = (root.findtext("format") or "json").strip()
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unsupported output format: {output_format}")

    strip_html = root.findtext("strip-html", "false").strip().lower() == "true"

    # Classifier
    cls_node = root.find("classifier")
    classifier_config = ClassifierConfig(
        normalize_date=_parse_flag(cls_node, "normalize-date"),
        accessibility_label=_parse_flag(cls_node, "accessibility-label"),
        priority_case_sensitive=_parse_flag(cls_node, "priority-case-sensitive"),
        type_case_sensitive=_parse_flag(cls_node, "type-case-sensitive"),
    )

    # Logging
    log_node = root.find("logging")
    logging_config = LoggingConfig()
    if log_node is not None:
        logging_config.level = log_node.findtext("level", "INFO")
        log_file = log_node.findtext("file")
        if log_file:
            logging_config.file = _resolve_path(config_path, log_file)

    return AppConfig(
        feed_url=feed_url,
        timeout=timeout,
        variant=variant,
        strip_html=strip_html,
        output_format=output_format,
        classifier=classifier_config,
        logging=logging_config,
    )


def build_rules(variant: str, overrides: ClassifierConfig) -> ClassifierRules:
    """Return the preset for ``variant`` with configured overrides applied."""
    try:
        rules = RULE_PRESETS[variant]
    except KeyError:
        raise ValueError(f"Unknown classifier variant: {variant}") from None

    changes = {}
    if overrides.normalize_date is not None:
        changes["normalize_date"] = overrides.normalize_date
    if overrides.accessibility_label is not None:
        changes["include_accessibility_label"] = overrides.accessibility_label
    if overrides.priority_case_sensitive is not None:
        changes["priority_case_sensitive"] = overrides.priority_case_sensitive
    if overrides.type_case_sensitive is not None:
        changes["type_case_sensitive"] = overrides.type_case_sensitive

    if changes:
        logger.debug("Applying classifier overrides: %s", changes)
        rules = rules.replace(**changes)
    return rules


def build_pipeline_config(app_config: AppConfig, **runtime) -> PipelineConfig:
    """Combine file configuration with runtime-only options."""
    return PipelineConfig(
        feed_url=app_config.feed_url,
        timeout=app_config.timeout,
        rules=build_rules(app_config.variant, app_config.classifier),
        strip_html=app_config.strip_html,
        output_format=app_config.output_format,
        **runtime,
    )
