"""Deterministic checks over a captured listing.

Usage:
    from related_products.validators import validation_engine, load_rule_set

    report = validation_engine.evaluate(snapshot, load_rule_set("wallet"))
    if not report.overall_pass:
        # Fail the test with report.item_results[i].reasons
"""

from related_products.validators.engine import ValidationEngine, validation_engine
from related_products.validators.errors import ConfigurationError
from related_products.validators.models import (
    InteractiveAction,
    ItemResult,
    ListingSnapshot,
    ProductItem,
    SectionResult,
    ValidationReport,
    ValidationRuleSet,
)
from related_products.validators.rulesets import default_rule_set, get_all_rule_sets, load_rule_set

__all__ = [
    "ValidationEngine",
    "validation_engine",
    "ConfigurationError",
    "InteractiveAction",
    "ItemResult",
    "ListingSnapshot",
    "ProductItem",
    "SectionResult",
    "ValidationReport",
    "ValidationRuleSet",
    "default_rule_set",
    "get_all_rule_sets",
    "load_rule_set",
]
