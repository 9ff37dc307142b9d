"""Core Package"""
from core.availability import (
    AvailabilityResolver,
    AvailabilityResult,
    BatchPacer,
    ResolutionStrategy,
    create_availability_resolver
)
from core.catalog import Extension, ExtensionCatalog, get_extension_catalog
from core.keywords import extract_keywords, require_keywords
from core.registrars import PricingAggregator, PricingResult, RegistrarQuote, get_pricing_aggregator
from core.variations import generate_variations
from core.exceptions import *

__all__ = [
    "AvailabilityResolver",
    "AvailabilityResult",
    "BatchPacer",
    "ResolutionStrategy",
    "create_availability_resolver",
    "Extension",
    "ExtensionCatalog",
    "get_extension_catalog",
    "extract_keywords",
    "require_keywords",
    "PricingAggregator",
    "PricingResult",
    "RegistrarQuote",
    "get_pricing_aggregator",
    "generate_variations"
]
