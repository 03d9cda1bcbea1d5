"""Each card must show image, title and price."""

from related_products.validators.base import ItemValidator
from related_products.validators.models import ProductItem, ValidationRuleSet


class FieldCompletenessValidator(ItemValidator):
    """Checks image/title/price visibility when the rule set requires it."""

    @property
    def name(self) -> str:
        return "FieldCompletenessValidator"

    @property
    def flag(self) -> str:
        return "fields_ok"

    def validate(self, item: ProductItem, rules: ValidationRuleSet) -> list[str]:
        if not rules.require_fields_complete:
            return []

        missing = []
        if not item.has_image:
            missing.append("image")
        if not item.has_visible_title:
            missing.append("title")
        if not item.has_visible_price:
            missing.append("price")

        if not missing:
            return []
        return [f"incomplete product info: missing {', '.join(missing)}"]
