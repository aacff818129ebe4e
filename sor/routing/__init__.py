"""Route discovery over the liquidity graph."""

from sor.routing.graph import FewestHops, GraphEdge, LiquidityGraph
from sor.routing.pathfinding import BestValueFinder, CostModel, FoundPath

__all__ = [
    "BestValueFinder",
    "CostModel",
    "FewestHops",
    "FoundPath",
    "GraphEdge",
    "LiquidityGraph",
]
