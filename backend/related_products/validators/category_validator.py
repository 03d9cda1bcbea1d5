"""Category check: every related item must belong to the expected category.

Covers both the positive case (only wallets shown for a wallet) and the
negative one (belts and shoes must not leak into the section).
"""

from related_products.validators.base import ItemValidator
from related_products.validators.models import ProductItem, ValidationRuleSet


class CategoryValidator(ItemValidator):
    """Exact, case-sensitive category match after trimming whitespace."""

    @property
    def name(self) -> str:
        return "CategoryValidator"

    @property
    def flag(self) -> str:
        return "category_ok"

    def validate(self, item: ProductItem, rules: ValidationRuleSet) -> list[str]:
        expected = self._clean(rules.expected_category)
        actual = self._clean(item.category)

        if actual == expected:
            return []

        if not actual:
            return [f"category mismatch: expected {expected}, got no category"]
        return [f"category mismatch: expected {expected}, got {actual}"]
