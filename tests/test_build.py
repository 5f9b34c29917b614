"""Tests for techradar.build."""

import json

import pytest

from techradar.build import build_site, changelog_payload
from techradar.content import load_blips
from techradar.core.errors import UnknownQuadrantError


class TestBuildSite:
    def test_writes_entries_and_changelog(self, radar_tree, radar_config, now):
        dist = radar_tree / "dist"
        blips = load_blips(radar_tree / "radar")

        result = build_site(radar_config, blips, dist, now=now)

        assert result.blip_count == 2
        assert result.entries_path == dist / "data" / "entries.json"

        entries = json.loads(result.entries_path.read_text())
        assert entries["entries"] == [
            {"label": "Kubernetes", "quadrant": 1, "ring": 1, "moved": 1},
            {"label": "Terraform", "quadrant": 2, "ring": 0, "moved": 2},
        ]
        assert entries["config"]["title"] == "Engineering Tech Radar"

        changelog = json.loads(result.changelog_path.read_text())
        assert changelog["days"] == 90
        assert changelog["generated_at"] == "2024-03-01T12:00:00+00:00"
        assert [c["blipName"] for c in changelog["changes"]] == ["Terraform", "Kubernetes"]
        assert changelog["changes"][1]["fromRing"] == "Assess"
        assert "fromRing" not in changelog["changes"][0]
        assert result.change_count == 2

    def test_cleans_previous_output(self, radar_tree, radar_config, now):
        dist = radar_tree / "dist"
        stale = dist / "old.html"
        stale.parent.mkdir(parents=True)
        stale.write_text("stale")

        build_site(radar_config, load_blips(radar_tree / "radar"), dist, now=now)

        assert not stale.exists()
        assert (dist / "data" / "entries.json").exists()

    def test_unknown_quadrant_leaves_previous_build(self, radar_config, make_blip, tmp_path, now):
        dist = tmp_path / "dist"
        previous = dist / "data" / "entries.json"
        previous.parent.mkdir(parents=True)
        previous.write_text("{}")

        with pytest.raises(UnknownQuadrantError):
            build_site(radar_config, [make_blip(quadrant="Databases", ring="Hold")], dist, now=now)

        assert previous.read_text() == "{}"


class TestChangelogPayload:
    def test_empty(self, now):
        assert changelog_payload([], 30, now) == {
            "days": 30,
            "generated_at": "2024-03-01T12:00:00+00:00",
            "changes": [],
        }
