"""Smart order routing and settlement estimation for a limit-order-book exchange."""

from sor.config import ExchangeConfig
from sor.service import QuoteRequest, SorEngine

__version__ = "0.1.0"
__all__ = ["ExchangeConfig", "QuoteRequest", "SorEngine", "__version__"]
