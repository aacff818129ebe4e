"""Exception hierarchy for the router.

The routing and estimation core does not raise for expected outcomes: a
missing route is `None` and an infeasible trade is `NoViableSettlement`.
These exceptions cover configuration mistakes and the facade boundary,
where callers asked for something that cannot be served.
"""


class SorError(Exception):
    """Base class for router errors."""

    pass


class UnknownAssetError(SorError, KeyError):
    """Asset symbol is not present in the exchange configuration."""

    pass


class MarketNotFoundError(SorError, KeyError):
    """No market is configured for the requested asset pair."""

    pass


class RouteNotFoundError(SorError):
    """No path connects the requested assets, even after a snapshot refresh."""

    def __init__(self, source: str, target: str) -> None:
        super().__init__(f"No route from {source} to {target}")
        self.source = source
        self.target = target


class InvalidAmountError(SorError, ValueError):
    """A requested amount is not a positive number of base units."""

    pass


class SnapshotFetchError(SorError):
    """The snapshot collaborator could not provide a book for a market."""

    pass


__all__ = [
    "InvalidAmountError",
    "MarketNotFoundError",
    "RouteNotFoundError",
    "SnapshotFetchError",
    "SorError",
    "UnknownAssetError",
]
