"""Rule-based classification of raw feed items."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Tuple

from .feeds import normalize_pub_date
from .models import Announcement, EmergencyType, PriorityCode, RawFeedItem

logger = logging.getLogger(__name__)

PRIORITY_KEYWORDS: Tuple[Tuple[str, PriorityCode], ...] = (
    ("a1", PriorityCode.A1),
    ("a2", PriorityCode.A2),
    ("b2", PriorityCode.B2),
    ("p 1", PriorityCode.P1),
    ("p 2", PriorityCode.P2),
)


@dataclass(frozen=True)
class TypeRule:
    """Assigns ``emergency_type`` when a keyword or a priority matches."""

    emergency_type: EmergencyType
    keywords: Tuple[str, ...] = ()
    priorities: FrozenSet[PriorityCode] = frozenset()


@dataclass(frozen=True)
class ClassifierRules:
    """Complete, explicit configuration of the classifier."""

    priority_keywords: Tuple[Tuple[str, PriorityCode], ...] = PRIORITY_KEYWORDS
    type_rules: Tuple[TypeRule, ...] = ()
    include_accessibility_label: bool = True
    normalize_date: bool = True
    priority_case_sensitive: bool = False
    type_case_sensitive: bool = True

    def replace(self, **changes) -> "ClassifierRules":
        return dataclasses.replace(self, **changes)


APP_RULES = ClassifierRules(
    type_rules=(
        TypeRule(
            EmergencyType.AMBULANCE,
            keywords=("Ambulance",),
            priorities=frozenset({PriorityCode.A1, PriorityCode.A2, PriorityCode.B2}),
        ),
        TypeRule(
            EmergencyType.FIREFIGHTERS,
            keywords=("Brand",),
            priorities=frozenset({PriorityCode.P1, PriorityCode.P2}),
        ),
        TypeRule(EmergencyType.TRAUMA, keywords=("Trauma", "heli")),
    ),
)

WIDGET_RULES = ClassifierRules(
    type_rules=(
        TypeRule(EmergencyType.AMBULANCE, keywords=("Ambulance",)),
        TypeRule(
            EmergencyType.FIREFIGHTERS,
            keywords=("Brand",),
            priorities=frozenset({PriorityCode.P1, PriorityCode.P2}),
        ),
    ),
    include_accessibility_label=False,
    normalize_date=False,
    priority_case_sensitive=True,
)

RULE_PRESETS: Dict[str, ClassifierRules] = {
    "app": APP_RULES,
    "widget": WIDGET_RULES,
}


def _contains(text: str, keyword: str, case_sensitive: bool) -> bool:
    if case_sensitive:
        return keyword in text
    return keyword.lower() in text.lower()


def detect_priority(title: str, rules: ClassifierRules = APP_RULES) -> PriorityCode:
    """Return the first priority whose keyword occurs in ``title``."""
    for keyword, code in rules.priority_keywords:
        if _contains(title, keyword, rules.priority_case_sensitive):
            return code
    return PriorityCode.UNKNOWN


def detect_emergency_type(
    description: str,
    priority: PriorityCode,
    rules: ClassifierRules = APP_RULES,
) -> EmergencyType:
    """Apply the ordered type rules; the first match wins."""
    for rule in rules.type_rules:
        if priority in rule.priorities:
            return rule.emergency_type
        if any(
            _contains(description, keyword, rules.type_case_sensitive)
            for keyword in rule.keywords
        ):
            return rule.emergency_type
    return EmergencyType.OTHER


def build_accessibility_label(
    title: str, priority: PriorityCode, emergency_type: EmergencyType
) -> str:
    return (
        f"{emergency_type.display_name} naar {title} "
        f"met spoedniveau {priority.value}"
    )


def classify(item: RawFeedItem, rules: ClassifierRules = APP_RULES) -> Announcement:
    """Turn a raw feed item into an immutable announcement."""
    priority = detect_priority(item.title, rules)
    emergency_type = detect_emergency_type(item.description, priority, rules)

    label: Optional[str] = None
    if rules.include_accessibility_label:
        label = build_accessibility_label(item.title, priority, emergency_type)

    pub_date = item.pub_date
    if rules.normalize_date:
        pub_date = normalize_pub_date(pub_date)

    logger.debug(
        "Classified '%s' as %s/%s",
        item.title,
        priority.value,
        emergency_type.value,
    )
    return Announcement(
        title=item.title,
        description=item.description,
        link=item.link,
        pub_date=pub_date,
        priority=priority,
        emergency_type=emergency_type,
        accessibility_label=label,
    )
