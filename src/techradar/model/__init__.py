"""techradar.model -- the content model and change-tracking engine.

Layer map (leaves first)::

    schemas.py       Ring/Status/Link/HistoryEntry/BlipFrontMatter/Blip/RadarConfig + validation
    ordinals.py      ring_index / status_moved_flag / quadrant_index
    consistency.py   history-vs-ring and chronological-order warnings
    changes.py       extract_recent_changes + direction classification
    projection.py    blips -> ZalandoEntry / ZalandoRadarData

Everything here is pure and synchronous; no module holds state between calls.
"""

from techradar.model.changes import (
    ChangeDirection,
    ChangeGroups,
    classify_change,
    extract_recent_changes,
    group_changes,
)
from techradar.model.consistency import (
    check_chronological_order,
    check_current_ring,
    check_history_consistency,
    validate_history_consistency,
)
from techradar.model.ordinals import (
    quadrant_index,
    ring_from_index,
    ring_index,
    status_moved_flag,
)
from techradar.model.projection import (
    blip_to_zalando_entry,
    blips_to_zalando_entries,
    build_radar_data,
)
from techradar.model.schemas import (
    Blip,
    BlipFrontMatter,
    ChangeLogEntry,
    HistoryEntry,
    Link,
    RadarConfig,
    Ring,
    Status,
    ValidationReport,
    ZalandoEntry,
    ZalandoRadarData,
    check_blip,
    check_config,
    validate_blip,
    validate_config,
    validate_history_entry,
)

__all__ = [
    # Schemas
    "Blip",
    "BlipFrontMatter",
    "ChangeLogEntry",
    "HistoryEntry",
    "Link",
    "RadarConfig",
    "Ring",
    "Status",
    "ValidationReport",
    "ZalandoEntry",
    "ZalandoRadarData",
    "check_blip",
    "check_config",
    "validate_blip",
    "validate_config",
    "validate_history_entry",
    # Ordinals
    "quadrant_index",
    "ring_from_index",
    "ring_index",
    "status_moved_flag",
    # Consistency
    "check_chronological_order",
    "check_current_ring",
    "check_history_consistency",
    "validate_history_consistency",
    # Changes
    "ChangeDirection",
    "ChangeGroups",
    "classify_change",
    "extract_recent_changes",
    "group_changes",
    # Projection
    "blip_to_zalando_entry",
    "blips_to_zalando_entries",
    "build_radar_data",
]
