"""Tests for centreline label placement."""

import pytest

from airportgen.layout.labels import (
    SPACING_LONG,
    SPACING_SHORT,
    LabelPlacement,
    centerline_label,
    label_spacing,
    place_labels,
    way_length,
)
from airportgen.osm.models import Node, Way


def make_way(points: list[tuple[float, float]], way_id: int = 1, **tags: str) -> Way:
    """Create a way from (latitude, longitude) pairs."""
    nodes = [Node(i + 1, lat, lon) for i, (lat, lon) in enumerate(points)]
    return Way(id=way_id, nodes=nodes, tags=dict(tags))


def straight(length: float, way_id: int = 1, **tags: str) -> Way:
    """Create a northbound straight way starting at (50, 4)."""
    return make_way([(50.0, 4.0), (50.0 + length, 4.0)], way_id, **tags)


class TestCenterlineLabel:
    """Test label derivation."""

    def test_ref_preferred(self) -> None:
        """Test ref wins over name."""
        assert centerline_label(Way(1, tags={"ref": "A1", "name": "Alpha One"})) == "A1"

    def test_name_fallback(self) -> None:
        """Test name is used without ref."""
        assert centerline_label(Way(1, tags={"name": "Alpha"})) == "Alpha"

    def test_no_label(self) -> None:
        """Test ways without ref or name have no label."""
        assert centerline_label(Way(1, tags={"aeroway": "taxiway"})) is None


class TestLabelSpacing:
    """Test spacing selection."""

    @pytest.mark.parametrize("label", ["A1", "12", "Taxiway 3"])
    def test_digits_short(self, label: str) -> None:
        """Test labels containing digits use the short spacing."""
        assert label_spacing(label) == SPACING_SHORT

    @pytest.mark.parametrize("label", ["A", "Alpha", "Y-Z"])
    def test_letters_long(self, label: str) -> None:
        """Test labels without digits use the long spacing."""
        assert label_spacing(label) == SPACING_LONG


class TestWayLength:
    """Test planar length."""

    def test_length(self) -> None:
        """Test segments are summed in degrees."""
        way = make_way([(0.0, 0.0), (0.003, 0.004), (0.003, 0.014)])
        assert way_length(way) == pytest.approx(0.015)

    def test_degenerate(self) -> None:
        """Test short and duplicate-point ways."""
        assert way_length(make_way([])) == 0.0
        assert way_length(make_way([(50.0, 4.0)])) == 0.0
        assert way_length(make_way([(50.0, 4.0), (50.0, 4.0)])) == 0.0


class TestSpacedPlacement:
    """Test evenly spaced labels."""

    @pytest.mark.parametrize("count", [1, 2, 3, 4, 7])
    def test_exact_multiple_centered(self, count: int) -> None:
        """Test N spacings hold N labels at spacing/2 + k*spacing."""
        way = straight(count * SPACING_LONG, ref="A")

        placements = place_labels([way])

        assert len(placements) == count
        for k, placement in enumerate(placements):
            assert placement.label == "A"
            assert placement.longitude == pytest.approx(4.0)
            assert placement.latitude - 50.0 == pytest.approx(
                SPACING_LONG / 2 + k * SPACING_LONG, abs=1e-9
            )

    def test_short_spacing_for_digits(self) -> None:
        """Test numeric designators get twice as many labels."""
        way = straight(4 * SPACING_SHORT, ref="B2")

        placements = place_labels([way])

        assert len(placements) == 4
        assert placements[1].latitude - placements[0].latitude == pytest.approx(SPACING_SHORT)

    def test_l_shape(self) -> None:
        """Test an L-shaped way of length 0.01 holds 2 labels, one per leg."""
        way = make_way([(0.0, 0.0), (0.005, 0.0), (0.005, 0.005)], ref="A")

        placements = place_labels([way])

        assert len(placements) == 2
        assert placements[0].latitude == pytest.approx(0.0025)
        assert placements[0].longitude == pytest.approx(0.0)
        assert placements[1].latitude == pytest.approx(0.005)
        assert placements[1].longitude == pytest.approx(0.0025)

    def test_remainder_split(self) -> None:
        """Test leftover length is shared between the two ends."""
        # 2.5 spacings: remainder 0.0025, first label after 0.005 - 0.00125
        way = straight(2.5 * SPACING_LONG, ref="A")

        placements = place_labels([way])

        assert [p.latitude - 50.0 for p in placements] == pytest.approx(
            [0.00375, 0.00875], abs=1e-9
        )

    def test_direction_follows_node_order(self) -> None:
        """Test labels are emitted in walking order."""
        way = make_way([(50.02, 4.0), (50.0, 4.0)], ref="A")

        latitudes = [p.latitude for p in place_labels([way])]

        assert latitudes == sorted(latitudes, reverse=True)

    def test_zero_length_segments(self) -> None:
        """Test duplicate consecutive points neither break nor duplicate labels."""
        way = make_way(
            [(50.0, 4.0), (50.0, 4.0), (50.005, 4.0), (50.005, 4.0), (50.01, 4.0), (50.01, 4.0)],
            ref="A",
        )

        placements = place_labels([way])

        assert len(placements) == 2
        assert len(set(placements)) == 2

    def test_all_points_identical(self) -> None:
        """Test a way with no extent falls back to its median node."""
        way = make_way([(50.0, 4.0)] * 4, ref="A")

        assert place_labels([way]) == [LabelPlacement("A", 50.0, 4.0)]

    def test_ways_measured_separately(self) -> None:
        """Test a label shared by two ways is placed on each independently."""
        first = straight(2 * SPACING_LONG, way_id=1, ref="A")
        second = make_way([(51.0, 4.0), (51.0 + 2 * SPACING_LONG, 4.0)], way_id=2, ref="A")

        placements = place_labels([first, second])

        assert len(placements) == 4
        assert [round(p.latitude) for p in placements] == [50, 50, 51, 51]


class TestFallbackPlacement:
    """Test median fallback for labels that never fit."""

    def test_single_point(self) -> None:
        """Test a 1-point way gets exactly one label at its point."""
        way = make_way([(50.1, 4.2)], ref="1")

        assert place_labels([way]) == [LabelPlacement("1", 50.1, 4.2)]

    def test_too_short(self) -> None:
        """Test a way shorter than half the spacing gets one median label."""
        way = make_way([(50.0, 4.0), (50.0005, 4.0), (50.001, 4.0)], ref="A")

        assert place_labels([way]) == [LabelPlacement("A", 50.0005, 4.0)]

    def test_even_count_median(self) -> None:
        """Test the median of an even node count is the node after the middle."""
        way = make_way([(50.0, 4.0), (50.0001, 4.0), (50.0002, 4.0), (50.0003, 4.0)], ref="A")

        assert place_labels([way]) == [LabelPlacement("A", 50.0002, 4.0)]

    def test_most_nodes_wins(self) -> None:
        """Test the fallback uses the way with the most nodes, not the longest."""
        longer = make_way([(50.0, 4.0), (50.002, 4.0)], way_id=1, ref="C")
        denser = make_way([(51.0, 4.0), (51.0001, 4.0), (51.0002, 4.0)], way_id=2, ref="C")

        assert place_labels([longer, denser]) == [LabelPlacement("C", 51.0001, 4.0)]

    def test_tie_first_way_wins(self) -> None:
        """Test ties on node count go to the first way."""
        first = make_way([(50.0, 4.0), (50.0001, 4.0)], way_id=1, ref="C")
        second = make_way([(51.0, 4.0), (51.0001, 4.0)], way_id=2, ref="C")

        assert place_labels([first, second]) == [LabelPlacement("C", 50.0001, 4.0)]

    def test_no_double_labelling(self) -> None:
        """Test a label placed on one way gets no fallback from a short way."""
        long_way = straight(2 * SPACING_LONG, way_id=1, ref="A")
        stub = make_way([(52.0, 4.0)], way_id=2, ref="A")

        placements = place_labels([stub, long_way])

        assert len(placements) == 2
        assert all(round(p.latitude) == 50 for p in placements)

    def test_fallbacks_after_spaced(self) -> None:
        """Test fallback placements follow all spaced placements."""
        stub = make_way([(52.0, 4.0)], way_id=1, ref="Z")
        long_way = straight(2 * SPACING_LONG, way_id=2, ref="A")

        placements = place_labels([stub, long_way])

        assert [p.label for p in placements] == ["A", "A", "Z"]

    def test_fallback_order_follows_first_seen(self) -> None:
        """Test fallback labels appear in first-seen order."""
        ways = [
            make_way([(50.0, 4.0)], way_id=1, ref="B"),
            make_way([(50.1, 4.0)], way_id=2, ref="A"),
            make_way([(50.2, 4.0)], way_id=3, ref="B"),
        ]

        assert [p.label for p in place_labels(ways)] == ["B", "A"]

    def test_empty_way(self) -> None:
        """Test a labelled way without nodes produces nothing."""
        assert place_labels([Way(1, tags={"ref": "A"})]) == []


class TestPlaceLabels:
    """Test place_labels() as a whole."""

    def test_empty(self) -> None:
        """Test no ways give no labels."""
        assert place_labels([]) == []

    def test_unlabelled_excluded(self) -> None:
        """Test ways without ref/name get no labels at all."""
        ways = [straight(2 * SPACING_LONG), make_way([(50.0, 4.0)], way_id=2)]

        assert place_labels(ways) == []

    def test_name_used(self) -> None:
        """Test name labels are placed like refs."""
        placements = place_labels([straight(SPACING_LONG, name="Outer")])

        assert [p.label for p in placements] == ["Outer"]

    def test_accepts_iterator(self) -> None:
        """Test any iterable of ways is accepted."""
        ways = (w for w in [straight(SPACING_LONG, ref="A")])

        assert len(place_labels(ways)) == 1

    def test_idempotent(self) -> None:
        """Test identical input gives identical output."""
        ways = [
            make_way([(50.0, 4.0), (50.004, 4.003), (50.009, 4.001)], way_id=1, ref="A"),
            make_way([(50.0, 4.0)], way_id=2, ref="B1"),
            straight(0.0123, way_id=3, name="Loop"),
        ]

        assert place_labels(ways) == place_labels(ways)

    def test_does_not_mutate_ways(self) -> None:
        """Test placement leaves the input untouched."""
        way = straight(3 * SPACING_LONG, ref="A")
        before = [(n.latitude, n.longitude) for n in way.nodes]

        place_labels([way])

        assert [(n.latitude, n.longitude) for n in way.nodes] == before
