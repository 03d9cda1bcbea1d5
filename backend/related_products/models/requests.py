"""API request models."""

from typing import Optional

from pydantic import BaseModel, Field

from related_products.snapshots.extraction import RawProductCard
from related_products.validators.models import ListingSnapshot, ValidationRuleSet


class EvaluateRequest(BaseModel):
    """Evaluate a typed snapshot.

    Explicit `rules` win over `rule_set`; with neither, the default rule set applies.
    """

    snapshot: ListingSnapshot
    rules: Optional[ValidationRuleSet] = None
    rule_set: Optional[str] = Field(default=None, examples=["wallet"])
    no_results_indicator_present: bool = False


class EvaluateRawRequest(BaseModel):
    """Evaluate cards exactly as a page driver scraped them."""

    cards: list[RawProductCard] = Field(default_factory=list)
    section_visible: bool = True
    rules: Optional[ValidationRuleSet] = None
    rule_set: Optional[str] = Field(default=None, examples=["wallet"])
    no_results_indicator_present: bool = False
