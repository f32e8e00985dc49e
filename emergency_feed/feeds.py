"""Feed retrieval and parsing helpers."""

from __future__ import annotations

import logging
import re
from typing import List, Optional
from xml.etree import ElementTree as ET

import requests
from bs4 import BeautifulSoup

from .models import NO_DATE, NO_DESCRIPTION, NO_LINK, NO_TITLE, RawFeedItem

logger = logging.getLogger(__name__)

FEED_URL = "https://www.alarmeringen.nl/feeds/region/midden-en-west-brabant.rss"


class FeedError(RuntimeError):
    """Base class for failures while obtaining the feed."""


class NetworkError(FeedError):
    """The feed could not be downloaded."""


class ParseError(FeedError):
    """The downloaded feed is not well-formed XML."""


def fetch_feed(url: str = FEED_URL, timeout: Optional[float] = None) -> bytes:
    """Download the raw feed document with a single GET request."""
    logger.info("Fetching feed %s", url)
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise NetworkError(f"Failed to fetch feed {url}: {exc}") from exc

    if not response.ok:
        logger.warning(
            "Feed %s answered with HTTP %s; passing body to the parser",
            url,
            response.status_code,
        )
    logger.debug("Received %d bytes from %s", len(response.content), url)
    return response.content


def parse_feed(content: bytes, strip_html: bool = False) -> List[RawFeedItem]:
    """Parse an RSS document into raw items, in document order."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        raise ParseError(f"Feed is not well-formed XML: {exc}") from exc

    if root.tag != "rss":
        logger.warning("Unexpected feed root <%s>; no items read", root.tag)
        return []

    channel = root.find("channel")
    if channel is None:
        logger.warning("Feed has no <channel> element; no items read")
        return []

    items: List[RawFeedItem] = []
    for node in channel.findall("item"):
        description = _element_text(node, "description", NO_DESCRIPTION)
        if strip_html and description != NO_DESCRIPTION:
            description = _strip_html(description) or NO_DESCRIPTION
        items.append(
            RawFeedItem(
                title=_element_text(node, "title", NO_TITLE),
                description=description,
                link=_element_text(node, "link", NO_LINK),
                pub_date=_element_text(node, "pubDate", NO_DATE),
            )
        )

    logger.info("Parsed %d items from feed", len(items))
    return items


def _element_text(parent: ET.Element, tag: str, placeholder: str) -> str:
    node = parent.find(tag)
    if node is None:
        return placeholder
    text = "".join(node.itertext())
    return text or placeholder


def _strip_html(raw_value: str) -> str:
    """Return text content extracted from HTML fragments."""
    soup = BeautifulSoup(raw_value, "html.parser")
    text = soup.get_text(separator=" ", strip=True)
    text = re.sub(r"\s+([.,;:!?])", r"\1", text)
    text = re.sub(r"\s{2,}", " ", text)
    return text.strip()


def normalize_pub_date(value: str) -> str:
    """Drop the weekday prefix and timezone offset from an RFC 822 date.

    ``"Sat, 10 Feb 2022 14:05:00 +0100"`` becomes ``" 10 Feb 2022 14:05:00"``.
    Values without both a comma and a ``+`` are returned untouched.
    """
    segments = value.split(",")
    if len(segments) < 2 or "+" not in segments[1]:
        return value
    return segments[1].split("+")[0].rstrip()
