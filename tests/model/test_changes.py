"""Change extraction over a time window, plus direction grouping."""

from datetime import UTC, datetime

import pytest

from techradar.model.changes import (
    ChangeDirection,
    classify_change,
    cutoff_for,
    extract_recent_changes,
    group_changes,
)
from techradar.model.schemas import ChangeLogEntry, Ring


def _change(from_ring, to_ring, date="2024-01-15"):
    return ChangeLogEntry(
        blip_name="X",
        quadrant="Tools",
        date=date,
        from_ring=from_ring,
        to_ring=to_ring,
        note="n",
        slug="x",
    )


# =============================================================================
# Cutoff
# =============================================================================


class TestCutoff:
    def test_subtracts_days(self, now):
        assert cutoff_for(90, now) == datetime(2023, 12, 2, 12, 0, tzinfo=UTC)

    def test_naive_now_treated_as_utc(self):
        assert cutoff_for(1, datetime(2024, 3, 1)) == datetime(2024, 2, 29, tzinfo=UTC)

    def test_defaults_to_current_time(self):
        before = datetime.now(UTC)
        cutoff = cutoff_for(0)
        assert before <= cutoff <= datetime.now(UTC)


# =============================================================================
# Extraction
# =============================================================================


class TestExtractRecentChanges:
    """Every history entry after the cutoff becomes one change."""

    def test_single_move(self, make_blip, now):
        blip = make_blip(
            history=[
                ("2023-06-01", "Assess", "Initial evaluation"),
                ("2024-01-15", "Trial", "Pilot successful", "#456"),
            ]
        )
        changes = extract_recent_changes([blip], 90, now=now)

        assert len(changes) == 1
        change = changes[0]
        assert change.blip_name == "Kubernetes"
        assert change.quadrant == "Platforms"
        assert change.date == "2024-01-15"
        assert change.from_ring is Ring.ASSESS
        assert change.to_ring is Ring.TRIAL
        assert change.note == "Pilot successful"
        assert change.pr == "#456"
        assert change.slug == "kubernetes"

    def test_first_entry_has_no_from_ring(self, make_blip, now):
        blip = make_blip("Terraform", history=[("2024-02-20", "Adopt")])
        (change,) = extract_recent_changes([blip], 90, now=now)
        assert change.from_ring is None
        assert classify_change(change) is ChangeDirection.NEW

    def test_entry_exactly_at_cutoff_excluded(self, make_blip):
        midnight = datetime(2024, 3, 1, tzinfo=UTC)
        blip = make_blip(history=[("2024-01-31", "Assess"), ("2024-02-01", "Trial")])
        changes = extract_recent_changes([blip], 30, now=midnight)
        assert [c.date for c in changes] == ["2024-02-01"]
        assert changes[0].from_ring is Ring.ASSESS

    def test_same_day_entry_before_intraday_cutoff_excluded(self, make_blip, now):
        blip = make_blip(history=[("2024-02-29", "Assess"), ("2024-03-01", "Trial")])
        changes = extract_recent_changes([blip], 1, now=now)
        assert [c.date for c in changes] == ["2024-03-01"]

    def test_newest_first_across_blips(self, make_blip, now):
        blips = [
            make_blip("A", history=[("2024-01-10", "Assess")]),
            make_blip("B", history=[("2024-02-10", "Trial")]),
            make_blip("C", history=[("2023-12-20", "Hold"), ("2024-01-20", "Assess")]),
        ]
        changes = extract_recent_changes(blips, 90, now=now)
        assert [(c.blip_name, c.date) for c in changes] == [
            ("B", "2024-02-10"),
            ("C", "2024-01-20"),
            ("A", "2024-01-10"),
            ("C", "2023-12-20"),
        ]

    def test_ties_keep_blip_then_history_order(self, make_blip, now):
        blips = [
            make_blip("First", history=[("2024-02-01", "Assess"), ("2024-02-01", "Trial")]),
            make_blip("Second", history=[("2024-02-01", "Hold")]),
        ]
        changes = extract_recent_changes(blips, 90, now=now)
        assert [(c.blip_name, c.to_ring) for c in changes] == [
            ("First", Ring.ASSESS),
            ("First", Ring.TRIAL),
            ("Second", Ring.HOLD),
        ]

    def test_pairs_with_previous_stored_entry(self, make_blip, now):
        # Out-of-order history is reported as stored, not re-sorted
        blip = make_blip(
            ring="Adopt",
            history=[("2024-02-01", "Trial"), ("2024-01-01", "Hold"), ("2024-02-15", "Adopt")],
        )
        changes = {c.date: c for c in extract_recent_changes([blip], 90, now=now)}
        assert changes["2024-01-01"].from_ring is Ring.TRIAL
        assert changes["2024-02-15"].from_ring is Ring.HOLD

    def test_nothing_in_window(self, make_blip, now):
        blip = make_blip(history=[("2020-01-01", "Adopt")])
        assert extract_recent_changes([blip], 30, now=now) == []

    def test_no_blips(self, now):
        assert extract_recent_changes([], 90, now=now) == []

    def test_blip_without_history(self, make_blip, now):
        assert extract_recent_changes([make_blip(ring="Trial")], 90, now=now) == []

    def test_idempotent(self, make_blip, now):
        blips = [
            make_blip("A", history=[("2024-01-10", "Assess"), ("2024-02-01", "Trial")]),
            make_blip("B", history=[("2024-02-10", "Hold")]),
        ]
        assert extract_recent_changes(blips, 90, now=now) == extract_recent_changes(
            blips, 90, now=now
        )

    def test_wider_window_is_superset(self, make_blip, now):
        blip = make_blip(history=[("2023-06-01", "Assess"), ("2024-01-15", "Trial")])
        narrow = extract_recent_changes([blip], 90, now=now)
        wide = extract_recent_changes([blip], 365, now=now)
        assert len(narrow) == 1
        assert len(wide) == 2
        assert all(c in wide for c in narrow)


# =============================================================================
# Classification and grouping
# =============================================================================


class TestClassifyChange:
    @pytest.mark.parametrize(
        "from_ring,to_ring,direction",
        [
            (None, Ring.ASSESS, ChangeDirection.NEW),
            (Ring.TRIAL, Ring.ADOPT, ChangeDirection.MOVED_IN),
            (Ring.HOLD, Ring.TRIAL, ChangeDirection.MOVED_IN),
            (Ring.TRIAL, Ring.HOLD, ChangeDirection.MOVED_OUT),
            (Ring.ADOPT, Ring.ASSESS, ChangeDirection.MOVED_OUT),
            (Ring.TRIAL, Ring.TRIAL, ChangeDirection.UNCHANGED),
        ],
    )
    def test_direction(self, from_ring, to_ring, direction):
        assert classify_change(_change(from_ring, to_ring)) is direction


class TestGroupChanges:
    def test_partitions_preserving_order(self):
        changes = [
            _change(None, Ring.ASSESS, "2024-02-20"),
            _change(Ring.HOLD, Ring.TRIAL, "2024-02-10"),
            _change(Ring.ADOPT, Ring.HOLD, "2024-02-05"),
            _change(Ring.ASSESS, Ring.ADOPT, "2024-01-30"),
            _change(Ring.TRIAL, Ring.TRIAL, "2024-01-20"),
        ]
        groups = group_changes(changes)

        assert [c.date for c in groups.new] == ["2024-02-20"]
        assert [c.date for c in groups.moved_in] == ["2024-02-10", "2024-01-30"]
        assert [c.date for c in groups.moved_out] == ["2024-02-05"]
        assert [c.date for c in groups.unchanged] == ["2024-01-20"]
        assert groups.total == len(changes)

    def test_empty(self):
        groups = group_changes([])
        assert groups.total == 0
        assert groups.new == []
