"""Best-value pathfinding over a mutable asset graph.

The graph is a matrix of directed edges between assets. Cost semantics are
pluggable through a CostModel: the finder only knows how to start an
accumulator, extend it by one edge and compare two accumulators.

Search is a visited-set BFS, so paths are discovered in non-decreasing hop
count and every asset is expanded at most once. Under a cost model that
disagrees with hop count the result is therefore the best path among those
discovered, not necessarily the cheapest path in the graph.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

import structlog

logger = structlog.get_logger()

E = TypeVar("E")
V = TypeVar("V")


class CostModel(Protocol[E, V]):
    """How path values are built and compared."""

    def zero(self) -> V:
        """Accumulator of the empty path."""
        ...

    def combine(self, acc: V, edge: E) -> V:
        """Extend an accumulator by one edge. Must not mutate `acc`."""
        ...

    def better_than(self, a: V, b: V) -> bool:
        """True if `a` is strictly preferable to `b`."""
        ...


@dataclass(frozen=True)
class FoundPath(Generic[V]):
    """A path and its accumulated value.

    Attributes:
        value: Accumulator after combining every edge along the path
        path: Assets from source to the reached target, inclusive
    """

    value: V
    path: list[str]

    @property
    def target(self) -> str:
        return self.path[-1]


@dataclass(frozen=True)
class _SearchFilters:
    exclude: frozenset[str]
    include_only: frozenset[str]

    def admits(self, asset: str) -> bool:
        if asset in self.exclude:
            return False
        return not self.include_only or asset in self.include_only

    def narrows(self, cached: _SearchFilters) -> bool:
        """True if these filters are at least as strict as `cached`.

        A path found under `cached` is then still a candidate, subject to
        re-validation against the current filters and edges.
        """
        if not cached.exclude <= self.exclude:
            return False
        if not cached.include_only:
            return True
        if not self.include_only:
            return False
        return self.include_only <= cached.include_only


class BestValueFinder(Generic[E, V]):
    """Cached best-path search over a matrix of directed edges.

    Edges are replaced wholesale by update_edge; there is no locking and the
    last writer wins per edge. Cached paths are re-validated against the
    current edges on every lookup, so a vanished edge never yields a stale
    route.
    """

    def __init__(
        self,
        assets: Iterable[str],
        cost_model: CostModel[E, V],
        max_hops: int,
    ) -> None:
        """Initialize the finder.

        Args:
            assets: Initial graph nodes; neighbor order follows this order
            cost_model: Accumulation and comparison semantics
            max_hops: Maximum number of edges in a path

        Raises:
            ValueError: If max_hops is not positive
        """
        if max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {max_hops}")
        self.max_hops = max_hops
        self._cost = cost_model
        self._edges: dict[str, dict[str, E | None]] = {}
        self._paths: dict[tuple[str, str], tuple[str, ...]] = {}
        self._filters: dict[tuple[str, str], _SearchFilters] = {}
        for asset in assets:
            self._add_node(asset)

    def _add_node(self, asset: str) -> None:
        if asset in self._edges:
            return
        for row in self._edges.values():
            row[asset] = None
        self._edges[asset] = dict.fromkeys(self._edges, None)
        self._edges[asset][asset] = None

    def has_asset(self, asset: str) -> bool:
        return asset in self._edges

    def edge(self, asset_a: str, asset_b: str) -> E | None:
        return self._edges.get(asset_a, {}).get(asset_b)

    def update_edge(
        self,
        asset_a: str,
        asset_b: str,
        forward: E | None,
        backward: E | None,
    ) -> None:
        """Replace both directed edges between two assets.

        A `None` forward edge removes the pair in both directions.
        """
        self._add_node(asset_a)
        self._add_node(asset_b)
        if forward is None:
            self._edges[asset_a][asset_b] = None
            self._edges[asset_b][asset_a] = None
        else:
            self._edges[asset_a][asset_b] = forward
            self._edges[asset_b][asset_a] = backward

    def find_path(
        self,
        initial_best: V,
        source: str,
        targets: Iterable[str],
        exclude: Iterable[str] | None = None,
        include_only: Iterable[str] | None = None,
    ) -> FoundPath[V] | None:
        """Find the best path from source to any of the targets.

        Args:
            initial_best: Value a path must beat to be accepted
            source: Starting asset, always admitted
            targets: Acceptable destination assets
            exclude: Assets that may not appear on the path
            include_only: If non-empty, the only assets allowed on the path
                (source and targets are added implicitly)

        Returns:
            The best path found, or None if no target is reachable
        """
        if source not in self._edges:
            logger.debug("path_unknown_source", source=source)
            return None

        target_list = list(dict.fromkeys(targets))
        target_set = frozenset(target_list)
        excluded = set(exclude or ())
        excluded.discard(source)
        allowed = set(include_only or ())
        if allowed:
            allowed |= target_set
            allowed.add(source)
        filters = _SearchFilters(exclude=frozenset(excluded), include_only=frozenset(allowed))

        for target in target_list:
            key = (source, target)
            cached_filters = self._filters.get(key)
            if cached_filters is None or not filters.narrows(cached_filters):
                if key in self._paths:
                    logger.debug("path_cache_reset", source=source, target=target)
                self._paths.pop(key, None)
                self._filters[key] = filters

        for target in target_list:
            cached_path = self._paths.get((source, target))
            if cached_path is None:
                continue
            value = self._value_along(cached_path)
            if value is not None and all(filters.admits(asset) for asset in cached_path[1:]):
                logger.debug("path_cache_hit", source=source, target=target, hops=len(cached_path) - 1)
                return FoundPath(value=value, path=list(cached_path))

        found = self._search(initial_best, source, target_set, filters)
        if found is None:
            logger.debug("path_search_exhausted", source=source, targets=target_list)
            return None

        key = (source, found.target)
        self._paths[key] = tuple(found.path)
        self._filters[key] = filters
        return found

    def best_value(self, source: str, initial_best: V, targets: Iterable[str]) -> V | None:
        """Value of the best path from source to any target, or None."""
        found = self.find_path(initial_best, source, targets)
        return found.value if found is not None else None

    def _value_along(self, path: tuple[str, ...]) -> V | None:
        value = self._cost.zero()
        for asset_a, asset_b in zip(path, path[1:], strict=False):
            edge = self.edge(asset_a, asset_b)
            if edge is None:
                return None
            value = self._cost.combine(value, edge)
        return value

    def _search(
        self,
        initial_best: V,
        source: str,
        targets: frozenset[str],
        filters: _SearchFilters,
    ) -> FoundPath[V] | None:
        queue: deque[tuple[list[str], V]] = deque([([source], self._cost.zero())])
        visited = {source}
        best_path: list[str] | None = None
        best_value = initial_best

        while queue:
            path, value = queue.popleft()
            last = path[-1]

            if last in targets:
                if self._cost.better_than(value, best_value):
                    best_path = path
                    best_value = value
                continue

            if len(path) > self.max_hops:
                continue

            for neighbor, edge in self._edges[last].items():
                if edge is None or neighbor in visited or not filters.admits(neighbor):
                    continue
                visited.add(neighbor)
                queue.append(([*path, neighbor], self._cost.combine(value, edge)))

        if best_path is None:
            return None
        return FoundPath(value=best_value, path=best_path)


__all__ = ["BestValueFinder", "CostModel", "FoundPath"]
