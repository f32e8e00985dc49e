import pytest


def build_rss(items_xml: str) -> bytes:
    document = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<rss version="2.0">\n'
        "  <channel>\n"
        "    <title>Alarmeringen Midden- en West-Brabant</title>\n"
        "    <link>https://www.alarmeringen.nl/</link>\n"
        f"{items_xml}"
        "  </channel>\n"
        "</rss>\n"
    )
    return document.encode("utf-8")


SAMPLE_ITEMS = """\
    <item>
      <title>Brandweer A1 groot alarm</title>
      <description>Brandweer wordt opgeroepen voor grote brand</description>
      <link>https://www.alarmeringen.nl/melding/1</link>
      <pubDate>Sat, 10 Feb 2022 14:05:00 +0100</pubDate>
    </item>
    <item>
      <title>p 1 BDH-01 Buitenbrand Breda</title>
      <description>Brandweer met spoed naar Breda</description>
      <link>https://www.alarmeringen.nl/melding/2</link>
      <pubDate>Sat, 10 Feb 2022 14:10:00 +0100</pubDate>
    </item>
    <item>
      <title>Lifeliner 3 Tilburg</title>
      <description>Traumaheli ingezet</description>
      <link>https://www.alarmeringen.nl/melding/3</link>
      <pubDate>Sat, 10 Feb 2022 14:15:00 +0100</pubDate>
    </item>
    <item>
      <title>Dienstverlening Roosendaal</title>
    </item>
"""


@pytest.fixture
def sample_feed() -> bytes:
    return build_rss(SAMPLE_ITEMS)


@pytest.fixture
def empty_feed() -> bytes:
    return build_rss("")


@pytest.fixture
def make_rss():
    return build_rss
