"""Shared data models for emergency_feed."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

NO_TITLE = "No title"
NO_DESCRIPTION = "No description"
NO_LINK = "No link"
NO_DATE = "No date"


class PriorityCode(str, Enum):
    """Dispatch urgency taken from the announcement title."""

    A1 = "A1"
    A2 = "A2"
    B2 = "B2"
    P1 = "P1"
    P2 = "P2"
    UNKNOWN = "Unknown"


class EmergencyType(str, Enum):
    """Responding service category."""

    AMBULANCE = "ambulance"
    FIREFIGHTERS = "firefighters"
    # No classification rule produces POLICE; kept for the presentation layer.
    POLICE = "police"
    TRAUMA = "trauma"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def icon(self) -> str:
        return icon_for(self)


_DISPLAY_NAMES = {
    EmergencyType.AMBULANCE: "Ambulance",
    EmergencyType.FIREFIGHTERS: "Brandweer",
    EmergencyType.POLICE: "Politie",
    EmergencyType.TRAUMA: "Trauma helikopter",
    EmergencyType.OTHER: "Onbekend",
}

_ICONS = {
    EmergencyType.AMBULANCE: "ambulance",
    EmergencyType.FIREFIGHTERS: "firefighter-helmet",
    EmergencyType.TRAUMA: "heli",
}

DEFAULT_ICON = "help-circle"


def icon_for(emergency_type: EmergencyType) -> str:
    """Return the display image key for an emergency type."""
    return _ICONS.get(emergency_type, DEFAULT_ICON)


@dataclass(frozen=True)
class RawFeedItem:
    """One ``<item>`` as read from the feed, placeholders filled in."""

    title: str = NO_TITLE
    description: str = NO_DESCRIPTION
    link: str = NO_LINK
    pub_date: str = NO_DATE


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Announcement:
    """Classified announcement handed to the presentation layer."""

    title: str
    description: str
    link: str
    pub_date: str
    priority: PriorityCode
    emergency_type: EmergencyType
    accessibility_label: Optional[str] = None
    id: str = field(default_factory=_new_id, compare=False)

    @property
    def icon(self) -> str:
        return icon_for(self.emergency_type)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "link": self.link,
            "pub_date": self.pub_date,
            "priority": self.priority.value,
            "type": self.emergency_type.value,
            "icon": self.icon,
            "accessibility_label": self.accessibility_label,
        }
