"""Base validators — abstract classes implementing the Strategy Pattern.

Each validator owns exactly one business rule and one result flag.
New validators are added without modifying the engine.
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from related_products.validators.models import ListingSnapshot, ProductItem, ValidationRuleSet


class BaseValidator(ABC):
    """Common contract for item and section validators.

    Contract:
        - validate() is deterministic: same input → same output
        - validate() returns a list of reasons (empty = check passed)
        - No network calls, no randomness, no mutation of its inputs
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logging."""
        ...

    @property
    @abstractmethod
    def flag(self) -> str:
        """Result field this validator drives (e.g. "category_ok")."""
        ...

    # ── Helper Methods ──

    @staticmethod
    def _clean(text: str) -> str:
        """Trim extracted text before comparison."""
        return (text or "").strip()

    @staticmethod
    def _money(value: Decimal) -> str:
        """Format a price bound for reason messages.

        Two decimal places when that is exact, otherwise every digit.
        """
        cents = value.quantize(Decimal("0.01"))
        if cents == value:
            return f"{cents}"
        return f"{value.normalize()}"


class ItemValidator(BaseValidator):
    """Checks a single related-product card."""

    @abstractmethod
    def validate(self, item: ProductItem, rules: ValidationRuleSet) -> list[str]:
        """Run the check against one item.

        Args:
            item: The card being checked
            rules: Rule set for this evaluation

        Returns:
            Failure reasons (empty if the item satisfies the rule)
        """
        ...


class SectionValidator(BaseValidator):
    """Checks the related-products section as a whole."""

    @abstractmethod
    def validate(
        self,
        snapshot: ListingSnapshot,
        rules: ValidationRuleSet,
        no_results_indicator_present: bool = False,
    ) -> list[str]:
        """Run the check against the whole snapshot.

        Args:
            snapshot: Captured section contents
            rules: Rule set for this evaluation
            no_results_indicator_present: Whether the driver saw a
                "No related products found" message

        Returns:
            Failure reasons (empty if the section satisfies the rule)
        """
        ...
