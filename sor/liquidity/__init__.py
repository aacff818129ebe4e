"""Uniform views over the books a swap traverses."""

from sor.liquidity.base import LiquidityPath
from sor.liquidity.direct import DirectPath
from sor.liquidity.multihop import MultiHopPath

__all__ = ["DirectPath", "LiquidityPath", "MultiHopPath"]
