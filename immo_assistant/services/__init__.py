"""Service package exports."""

from .communes import CommuneDirectory, PostalCodeResolver
from .llm import GenerativeClient, GenerationResult, OpenRouterClient, RawText, Structured
from .market import MarketReference, build_market_reference

__all__ = [
    "CommuneDirectory",
    "PostalCodeResolver",
    "GenerativeClient",
    "GenerationResult",
    "OpenRouterClient",
    "RawText",
    "Structured",
    "MarketReference",
    "build_market_reference",
]
