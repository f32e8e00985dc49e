"""Plain-text rendering of announcement lists."""

from __future__ import annotations

from typing import Sequence

from .models import Announcement
from .templating import get_environment

HEADING = "Meldingen in Brabant"


def build_announcements_text(announcements: Sequence[Announcement]) -> str:
    """Render announcements as a readable listing using the Jinja2 template."""
    env = get_environment()
    template = env.get_template("announcements.txt.j2")
    return template.render(heading=HEADING, announcements=announcements)
