"""Validation models — snapshot inputs, rule sets, per-item results and report structure.

Inputs (ProductItem, ListingSnapshot, ValidationRuleSet) are frozen: the engine
never mutates them. Results are built fresh for every evaluation.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, Field


class InteractiveAction(str, Enum):
    """Buttons a related-product card can offer."""

    ADD_TO_CART = "add_to_cart"
    ADD_TO_WATCHLIST = "add_to_watchlist"


# ── Inputs ──


class ProductItem(BaseModel):
    """One displayed related-product card, as extracted by the page driver."""

    title: str = ""
    category: str = ""
    price: Decimal
    has_image: bool = True
    has_visible_title: bool = True
    has_visible_price: bool = True
    interactive_actions: frozenset[InteractiveAction] = frozenset()

    model_config = {"frozen": True}


class ListingSnapshot(BaseModel):
    """A captured rendering of a related-products section."""

    items: tuple[ProductItem, ...] = ()
    section_visible: bool = True

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.items)


class ValidationRuleSet(BaseModel):
    """Business constraints a snapshot is checked against.

    Construction accepts any values. Range checks run in the engine's
    pre-flight, which raises ConfigurationError before anything is evaluated.
    """

    name: str = "custom"
    expected_category: str
    base_price: Decimal
    tolerance_fraction: Decimal
    max_items: int
    require_fields_complete: bool = True
    required_actions: frozenset[InteractiveAction] = frozenset()
    require_section_visible: bool = False

    model_config = {"frozen": True}

    @property
    def price_bounds(self) -> tuple[Decimal, Decimal]:
        """Inclusive (low, high) price band around base_price."""
        low = self.base_price * (1 - self.tolerance_fraction)
        high = self.base_price * (1 + self.tolerance_fraction)
        return low, high


# ── Results ──


class ItemResult(BaseModel):
    """Outcome of every item-level check for the item at `index`."""

    index: int
    category_ok: bool = True
    price_ok: bool = True
    fields_ok: bool = True
    actions_ok: bool = True
    reasons: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.category_ok and self.price_ok and self.fields_ok and self.actions_ok


class SectionResult(BaseModel):
    """Outcome of the section-level checks."""

    count_ok: bool = True
    empty_handled_ok: bool = True
    visible_ok: bool = True
    reasons: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.count_ok and self.empty_handled_ok and self.visible_ok


class ValidationReport(BaseModel):
    """Complete validation report — the output of the validation engine."""

    overall_pass: bool
    rule_set: str = Field(default="custom", description="Name of the rule set applied")
    item_results: list[ItemResult] = Field(default_factory=list)
    section_result: SectionResult = Field(default_factory=SectionResult)
    failing_items: int = 0
    verdict: str = Field(default="", description="Human-readable verdict")

    @classmethod
    def build(
        cls,
        item_results: list[ItemResult],
        section_result: SectionResult,
        rule_set: str = "custom",
    ) -> "ValidationReport":
        """Build a complete report from item and section results."""
        failing_items = sum(1 for r in item_results if not r.passed)
        overall_pass = failing_items == 0 and section_result.passed

        if overall_pass and not item_results:
            verdict = f"PASS: no related items shown and the empty state is handled ({rule_set})."
        elif overall_pass:
            verdict = f"PASS: all {len(item_results)} related item(s) satisfy rule set '{rule_set}'."
        elif not section_result.passed:
            verdict = (
                f"FAIL: section check failed ({'; '.join(section_result.reasons)}); "
                f"{failing_items} of {len(item_results)} item(s) failing."
            )
        else:
            verdict = f"FAIL: {failing_items} of {len(item_results)} related item(s) violate rule set '{rule_set}'."

        return cls(
            overall_pass=overall_pass,
            rule_set=rule_set,
            item_results=item_results,
            section_result=section_result,
            failing_items=failing_items,
            verdict=verdict,
        )
