"""Tests for techradar.model.ordinals."""

import pytest

from techradar.core.errors import UnknownQuadrantError
from techradar.model.ordinals import (
    quadrant_index,
    ring_from_index,
    ring_index,
    status_moved_flag,
)
from techradar.model.schemas import Ring, Status

QUADRANTS = ["Techniques", "Platforms", "Tools", "Languages & Frameworks"]


class TestRingIndex:
    @pytest.mark.parametrize(
        "ring,expected",
        [(Ring.ADOPT, 0), (Ring.TRIAL, 1), (Ring.ASSESS, 2), (Ring.HOLD, 3)],
    )
    def test_ring_index(self, ring, expected):
        assert ring_index(ring) == expected

    def test_accepts_label(self):
        assert ring_index("Assess") == 2

    def test_inverse(self):
        for ring in Ring:
            assert ring_from_index(ring_index(ring)) is ring

    @pytest.mark.parametrize("index", [-1, 4])
    def test_inverse_out_of_range(self, index):
        with pytest.raises(ValueError, match="out of range"):
            ring_from_index(index)


class TestStatusMovedFlag:
    @pytest.mark.parametrize(
        "status,expected",
        [
            (Status.NEW, 2),
            (Status.MOVED_IN, 1),
            (Status.MOVED_OUT, -1),
            (Status.NO_CHANGE, 0),
        ],
    )
    def test_flags(self, status, expected):
        assert status_moved_flag(status) == expected


class TestQuadrantIndex:
    """Quadrant lookup follows configured order and ignores case."""

    def test_exact(self):
        assert quadrant_index("Platforms", QUADRANTS) == 1

    @pytest.mark.parametrize("name", ["tools", "TOOLS", "ToOlS"])
    def test_case_insensitive(self, name):
        assert quadrant_index(name, QUADRANTS) == 2

    def test_name_with_punctuation(self):
        assert quadrant_index("languages & frameworks", QUADRANTS) == 3

    def test_unknown_quadrant(self):
        with pytest.raises(UnknownQuadrantError) as exc_info:
            quadrant_index("Databases", QUADRANTS)
        assert exc_info.value.message == "Unknown quadrant: Databases"
        assert exc_info.value.known == QUADRANTS

    def test_follows_configured_order(self):
        assert quadrant_index("Techniques", list(reversed(QUADRANTS))) == 3
