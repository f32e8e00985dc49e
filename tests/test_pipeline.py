import json

import pytest

import emergency_feed.pipeline as pipeline
from emergency_feed.classifier import WIDGET_RULES
from emergency_feed.feeds import NetworkError, ParseError
from emergency_feed.models import EmergencyType, PriorityCode
from emergency_feed.pipeline import PipelineConfig, collect_announcements, execute


def _serve(monkeypatch, content):
    calls = []

    def fake_fetch(url, timeout=None):
        calls.append(url)
        return content

    monkeypatch.setattr(pipeline, "fetch_feed", fake_fetch)
    return calls


def test_collect_announcements_classifies_in_feed_order(monkeypatch, sample_feed):
    calls = _serve(monkeypatch, sample_feed)

    announcements = collect_announcements(PipelineConfig())

    assert len(calls) == 1
    assert [(a.priority, a.emergency_type) for a in announcements] == [
        (PriorityCode.A1, EmergencyType.AMBULANCE),
        (PriorityCode.P1, EmergencyType.FIREFIGHTERS),
        (PriorityCode.UNKNOWN, EmergencyType.TRAUMA),
        (PriorityCode.UNKNOWN, EmergencyType.OTHER),
    ]
    assert [a.icon for a in announcements] == [
        "ambulance",
        "firefighter-helmet",
        "heli",
        "help-circle",
    ]
    assert announcements[0].pub_date == " 10 Feb 2022 14:05:00"
    assert announcements[3].pub_date == "No date"


def test_collect_announcements_empty_feed_is_not_an_error(monkeypatch, empty_feed):
    _serve(monkeypatch, empty_feed)

    assert collect_announcements(PipelineConfig()) == []


def test_collect_announcements_malformed_feed_raises(monkeypatch):
    _serve(monkeypatch, b"<rss><channel><item><title>A1")

    with pytest.raises(ParseError):
        collect_announcements(PipelineConfig())


def test_collect_announcements_network_error_propagates(monkeypatch):
    def failing_fetch(url, timeout=None):
        raise NetworkError("offline")

    monkeypatch.setattr(pipeline, "fetch_feed", failing_fetch)

    with pytest.raises(NetworkError):
        collect_announcements(PipelineConfig())


def test_collect_announcements_repeated_runs_are_equal_with_fresh_ids(
    monkeypatch, sample_feed
):
    _serve(monkeypatch, sample_feed)
    config = PipelineConfig()

    first = collect_announcements(config)
    second = collect_announcements(config)

    assert first == second
    assert first is not second
    assert {a.id for a in first}.isdisjoint(a.id for a in second)


def test_collect_announcements_uses_configured_rules(monkeypatch, sample_feed):
    _serve(monkeypatch, sample_feed)

    announcements = collect_announcements(PipelineConfig(rules=WIDGET_RULES))

    assert all(a.accessibility_label is None for a in announcements)
    assert announcements[0].pub_date == "Sat, 10 Feb 2022 14:05:00 +0100"


def test_collect_announcements_reads_feed_file(monkeypatch, tmp_path, sample_feed):
    def unexpected_fetch(url, timeout=None):
        raise AssertionError("network must not be used")

    monkeypatch.setattr(pipeline, "fetch_feed", unexpected_fetch)
    feed_file = tmp_path / "feed.rss"
    feed_file.write_bytes(sample_feed)

    announcements = collect_announcements(PipelineConfig(feed_file=str(feed_file)))

    assert len(announcements) == 4


def test_collect_announcements_missing_feed_file(tmp_path):
    config = PipelineConfig(feed_file=str(tmp_path / "missing.rss"))

    with pytest.raises(RuntimeError, match="Feed snapshot not found"):
        collect_announcements(config)


def test_execute_renders_json_and_saves(monkeypatch, tmp_path, sample_feed):
    _serve(monkeypatch, sample_feed)
    save_path = tmp_path / "out" / "announcements.json"

    result = execute(PipelineConfig(save_path=str(save_path)))

    payload = json.loads(result.output_text)
    assert payload[0]["title"] == "Brandweer A1 groot alarm"
    assert payload[0]["type"] == "ambulance"
    assert payload[0]["icon"] == "ambulance"
    assert payload[1]["priority"] == "P1"

    saved = json.loads(save_path.read_text(encoding="utf-8"))
    assert [item["id"] for item in saved] == [a.id for a in result.announcements]


def test_execute_renders_text(monkeypatch, sample_feed):
    _serve(monkeypatch, sample_feed)

    result = execute(PipelineConfig(output_format="text"))

    assert "Meldingen in Brabant" in result.output_text
    assert "[A1] Ambulance (ambulance)" in result.output_text
    assert "Brandweer A1 groot alarm" in result.output_text


def test_execute_rejects_unknown_format():
    with pytest.raises(ValueError):
        execute(PipelineConfig(output_format="yaml"))
