"""Tests for the cached best-value path finder."""

import pytest

from sor.routing import BestValueFinder

UNREACHABLE = 10**9


class EdgeCount:
    """Counts edges; fewer is better."""

    def zero(self) -> int:
        return 0

    def combine(self, acc: int, edge: str) -> int:
        return acc + 1

    def better_than(self, a: int, b: int) -> bool:
        return a < b


def connect(finder: BestValueFinder, a: str, b: str) -> None:
    finder.update_edge(a, b, f"{a}{b}", f"{b}{a}")


@pytest.fixture
def finder() -> BestValueFinder:
    """A-B-C and A-X-C diamonds, with D hanging off C."""
    finder = BestValueFinder(["A", "B", "C", "D", "X", "Y"], EdgeCount(), max_hops=3)
    connect(finder, "A", "B")
    connect(finder, "B", "C")
    connect(finder, "A", "X")
    connect(finder, "X", "C")
    connect(finder, "C", "D")
    return finder


def path_of(finder, source, target, **filters):
    found = finder.find_path(UNREACHABLE, source, [target], **filters)
    return found.path if found is not None else None


class TestEdges:
    def test_update_is_bidirectional(self, finder):
        assert finder.edge("A", "B") == "AB"
        assert finder.edge("B", "A") == "BA"

    def test_none_forward_removes_both_directions(self, finder):
        finder.update_edge("A", "B", None, "BA")
        assert finder.edge("A", "B") is None
        assert finder.edge("B", "A") is None

    def test_unknown_assets_are_added(self, finder):
        connect(finder, "D", "Z")
        assert finder.has_asset("Z")
        assert path_of(finder, "A", "Z") is None  # four hops away
        assert finder.edge("Z", "D") == "ZD"

    def test_invalid_max_hops(self):
        with pytest.raises(ValueError):
            BestValueFinder(["A"], EdgeCount(), max_hops=0)


class TestSearch:
    def test_fewest_edges(self, finder):
        """Neighbor order follows registration order, so B wins the tie."""
        assert path_of(finder, "A", "C") == ["A", "B", "C"]

    def test_value(self, finder):
        assert finder.best_value("A", UNREACHABLE, ["D"]) == 3

    def test_hop_bound(self, finder):
        finder.max_hops = 2
        assert path_of(finder, "A", "D") is None
        assert path_of(finder, "A", "C") == ["A", "B", "C"]

    def test_unreachable_target(self, finder):
        assert path_of(finder, "A", "Y") is None

    def test_unknown_source(self, finder):
        assert path_of(finder, "Q", "A") is None

    def test_initial_best_must_be_beaten(self, finder):
        assert finder.find_path(2, "A", ["C"]) is None
        assert finder.find_path(3, "A", ["C"]).value == 2

    def test_nearest_of_several_targets(self, finder):
        found = finder.find_path(UNREACHABLE, "A", ["D", "C"])
        assert found.target == "C"


class TestFilters:
    def test_exclude(self, finder):
        assert path_of(finder, "A", "C", exclude={"B"}) == ["A", "X", "C"]

    def test_source_is_never_excluded(self, finder):
        assert path_of(finder, "A", "C", exclude={"A"}) == ["A", "B", "C"]

    def test_include_only_admits_source_and_target(self, finder):
        assert path_of(finder, "A", "C", include_only={"X"}) == ["A", "X", "C"]

    def test_include_only_without_connection(self, finder):
        assert path_of(finder, "A", "D", include_only={"Y"}) is None


class TestCache:
    def test_cached_path_reused_under_stricter_filters(self, finder):
        """A path cached under looser filters is returned while still valid."""
        assert path_of(finder, "A", "C", exclude={"Y"}) == ["A", "B", "C"]
        connect(finder, "A", "C")
        assert path_of(finder, "A", "C", exclude={"Y", "D"}) == ["A", "B", "C"]

    def test_looser_filters_reset_the_cache(self, finder):
        assert path_of(finder, "A", "C", exclude={"Y"}) == ["A", "B", "C"]
        connect(finder, "A", "C")
        assert path_of(finder, "A", "C", exclude=set()) == ["A", "C"]

    def test_cached_path_revalidated_against_edges(self, finder):
        assert path_of(finder, "A", "C") == ["A", "B", "C"]
        finder.update_edge("B", "C", None, None)
        assert path_of(finder, "A", "C") == ["A", "X", "C"]

    def test_cached_path_revalidated_against_filters(self, finder):
        assert path_of(finder, "A", "C") == ["A", "B", "C"]
        assert path_of(finder, "A", "C", exclude={"B"}) == ["A", "X", "C"]

    def test_removed_edge_leaves_no_route(self, finder):
        assert path_of(finder, "C", "D") == ["C", "D"]
        finder.update_edge("C", "D", None, None)
        assert path_of(finder, "C", "D") is None
