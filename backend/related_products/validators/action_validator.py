"""Required buttons must be offered on every card.

Add to Cart and Add to Watchlist are only checked when the rule set lists them
in required_actions; the default wallet rule set requires none.
"""

from related_products.validators.base import ItemValidator
from related_products.validators.models import InteractiveAction, ProductItem, ValidationRuleSet

ACTION_LABELS = {
    InteractiveAction.ADD_TO_CART: "Add to cart",
    InteractiveAction.ADD_TO_WATCHLIST: "Add to Watchlist",
}


class InteractiveActionValidator(ItemValidator):
    """Reports required actions missing from a card."""

    @property
    def name(self) -> str:
        return "InteractiveActionValidator"

    @property
    def flag(self) -> str:
        return "actions_ok"

    def validate(self, item: ProductItem, rules: ValidationRuleSet) -> list[str]:
        missing = [
            action for action in InteractiveAction
            if action in rules.required_actions and action not in item.interactive_actions
        ]
        if not missing:
            return []
        labels = ", ".join(f"'{ACTION_LABELS[a]}'" for a in missing)
        return [f"missing action: {labels} not available"]
