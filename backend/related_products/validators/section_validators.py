"""Checks on the related-products section as a whole.

ItemCountValidator caps how many items may be shown, EmptySectionValidator
requires an explicit "no results" message when nothing is shown, and
SectionVisibilityValidator requires the section container to be rendered.
"""

from related_products.validators.base import SectionValidator
from related_products.validators.models import ListingSnapshot, ValidationRuleSet


class ItemCountValidator(SectionValidator):
    """At most max_items related products may be displayed."""

    @property
    def name(self) -> str:
        return "ItemCountValidator"

    @property
    def flag(self) -> str:
        return "count_ok"

    def validate(
        self,
        snapshot: ListingSnapshot,
        rules: ValidationRuleSet,
        no_results_indicator_present: bool = False,
    ) -> list[str]:
        count = len(snapshot)
        if count <= rules.max_items:
            return []
        return [f"too many items: {count} shown, maximum is {rules.max_items}"]


class EmptySectionValidator(SectionValidator):
    """An empty section is only valid when the "no results" message is shown.

    When items are present the indicator is irrelevant.
    """

    @property
    def name(self) -> str:
        return "EmptySectionValidator"

    @property
    def flag(self) -> str:
        return "empty_handled_ok"

    def validate(
        self,
        snapshot: ListingSnapshot,
        rules: ValidationRuleSet,
        no_results_indicator_present: bool = False,
    ) -> list[str]:
        if len(snapshot) > 0 or no_results_indicator_present:
            return []
        return ["empty section: no items shown and no 'No related products found' message"]


class SectionVisibilityValidator(SectionValidator):
    """The section container must be visible, when the rule set asks for it."""

    @property
    def name(self) -> str:
        return "SectionVisibilityValidator"

    @property
    def flag(self) -> str:
        return "visible_ok"

    def validate(
        self,
        snapshot: ListingSnapshot,
        rules: ValidationRuleSet,
        no_results_indicator_present: bool = False,
    ) -> list[str]:
        if not rules.require_section_visible or snapshot.section_visible:
            return []
        return ["section not visible: 'Related Products' section is not displayed"]
