"""Visualization projection: blips -> radar.js entries."""

from __future__ import annotations

from collections.abc import Iterable

from techradar.model.ordinals import quadrant_index, ring_index, status_moved_flag
from techradar.model.schemas import BlipFrontMatter, RadarConfig, ZalandoEntry, ZalandoRadarData


def blip_to_zalando_entry(blip: BlipFrontMatter, config: RadarConfig) -> ZalandoEntry:
    """Project one blip; raises UnknownQuadrantError for an unconfigured quadrant."""
    return ZalandoEntry(
        label=blip.name,
        quadrant=quadrant_index(blip.quadrant, config.quadrants),
        ring=ring_index(blip.ring),
        moved=status_moved_flag(blip.status),
    )


def blips_to_zalando_entries(
    blips: Iterable[BlipFrontMatter], config: RadarConfig
) -> list[ZalandoEntry]:
    return [blip_to_zalando_entry(blip, config) for blip in blips]


def build_radar_data(blips: Iterable[BlipFrontMatter], config: RadarConfig) -> ZalandoRadarData:
    """``{entries, config}`` payload for the radar renderer."""
    return ZalandoRadarData(entries=blips_to_zalando_entries(blips, config), config=config)


__all__ = ["blip_to_zalando_entry", "blips_to_zalando_entries", "build_radar_data"]
