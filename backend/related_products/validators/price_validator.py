"""Price band check: related items must be priced near the base product.

The band is base_price * (1 ± tolerance_fraction), inclusive on both ends,
computed in Decimal so that boundary prices compare exactly.
"""

from related_products.validators.base import ItemValidator
from related_products.validators.models import ProductItem, ValidationRuleSet


class PriceBandValidator(ItemValidator):
    """Flags items priced outside the tolerance band."""

    @property
    def name(self) -> str:
        return "PriceBandValidator"

    @property
    def flag(self) -> str:
        return "price_ok"

    def validate(self, item: ProductItem, rules: ValidationRuleSet) -> list[str]:
        low, high = rules.price_bounds

        if low <= item.price <= high:
            return []

        direction = "below" if item.price < low else "above"
        return [
            f"price out of range: {item.price} is {direction} "
            f"[{self._money(low)}, {self._money(high)}]"
        ]
