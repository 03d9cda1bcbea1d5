"""Validation Engine — runs every validator over a snapshot and produces a report.

This is the main entry point for related-products validation. Item validators
run once per item in display order; section validators run once per snapshot.
Every check runs for every item (no short-circuit), so a single report surfaces
all failures at once.

Usage:
    engine = ValidationEngine()
    report = engine.evaluate(snapshot, rules, no_results_indicator_present=False)
    if not report.overall_pass:
        # Fail the test with each item's reasons
"""

import time
from decimal import Decimal
from typing import Optional, Union

import structlog

from related_products.validators.base import BaseValidator, ItemValidator, SectionValidator
from related_products.validators.errors import ConfigurationError
from related_products.validators.models import (
    ItemResult,
    ListingSnapshot,
    ProductItem,
    SectionResult,
    ValidationReport,
    ValidationRuleSet,
)

from related_products.validators.category_validator import CategoryValidator
from related_products.validators.price_validator import PriceBandValidator
from related_products.validators.completeness_validator import FieldCompletenessValidator
from related_products.validators.action_validator import InteractiveActionValidator
from related_products.validators.section_validators import (
    EmptySectionValidator,
    ItemCountValidator,
    SectionVisibilityValidator,
)

logger = structlog.get_logger()

ITEM_FLAGS = ("category_ok", "price_ok", "fields_ok", "actions_ok")
SECTION_FLAGS = ("count_ok", "empty_handled_ok", "visible_ok")


class ValidationEngine:
    """Evaluates a ListingSnapshot against a ValidationRuleSet.

    Design principles:
        - Pure: inputs are never mutated, each call builds a fresh report
        - Deterministic: same input → same report
        - Complete: every item and every check is evaluated
        - Observable: logs every evaluation with timing
    """

    def __init__(
        self,
        item_validators: Optional[list[ItemValidator]] = None,
        section_validators: Optional[list[SectionValidator]] = None,
    ):
        """Initialize with default validators or custom lists.

        Args:
            item_validators: Optional per-item checks. If None, uses all defaults.
            section_validators: Optional section checks. If None, uses all defaults.
        """
        self.item_validators: list[ItemValidator] = []
        self.section_validators: list[SectionValidator] = []

        if item_validators is None:
            item_validators = self._default_item_validators()
        if section_validators is None:
            section_validators = self._default_section_validators()

        for validator in [*item_validators, *section_validators]:
            self.add_validator(validator)

    @staticmethod
    def _default_item_validators() -> list[ItemValidator]:
        """Create the default per-item chain in reporting order."""
        return [
            CategoryValidator(),
            PriceBandValidator(),
            FieldCompletenessValidator(),
            InteractiveActionValidator(),
        ]

    @staticmethod
    def _default_section_validators() -> list[SectionValidator]:
        """Create the default section chain in reporting order."""
        return [
            ItemCountValidator(),
            EmptySectionValidator(),
            SectionVisibilityValidator(),
        ]

    def evaluate(
        self,
        snapshot: ListingSnapshot,
        rules: ValidationRuleSet,
        no_results_indicator_present: bool = False,
    ) -> ValidationReport:
        """Run all validators against the snapshot and produce a report.

        Args:
            snapshot: Related-product items captured by the page driver
            rules: Rule set to check the snapshot against
            no_results_indicator_present: Whether a "No related products found"
                message was displayed

        Returns:
            ValidationReport with one ItemResult per item, in snapshot order

        Raises:
            ConfigurationError: If the rule set or an item price is malformed.
                Raised before any item is evaluated.
        """
        start_time = time.perf_counter()

        try:
            self.check_inputs(snapshot, rules)
        except ConfigurationError as e:
            logger.warning(
                "evaluation_rejected",
                rule_set=rules.name,
                field=e.field,
                error=str(e),
            )
            raise

        item_results = [
            self._evaluate_item(index, item, rules)
            for index, item in enumerate(snapshot.items)
        ]
        section_result = self._evaluate_section(snapshot, rules, no_results_indicator_present)

        report = ValidationReport.build(item_results, section_result, rule_set=rules.name)

        total_duration = (time.perf_counter() - start_time) * 1000

        logger.info(
            "evaluation_complete",
            rule_set=rules.name,
            overall_pass=report.overall_pass,
            item_count=len(item_results),
            failing_items=report.failing_items,
            section_ok=section_result.passed,
            duration_ms=round(total_duration, 2),
        )

        return report

    @staticmethod
    def check_inputs(snapshot: ListingSnapshot, rules: ValidationRuleSet) -> None:
        """Reject malformed rule sets and item prices.

        Raises:
            ConfigurationError: On the first malformed value found
        """
        if not rules.base_price.is_finite() or rules.base_price <= 0:
            raise ConfigurationError(
                f"base_price must be a positive number, got {rules.base_price}",
                field="base_price",
            )

        tolerance = rules.tolerance_fraction
        if not tolerance.is_finite() or not (Decimal(0) < tolerance <= Decimal(1)):
            raise ConfigurationError(
                f"tolerance_fraction must be in (0, 1], got {tolerance}",
                field="tolerance_fraction",
            )

        if rules.max_items < 0:
            raise ConfigurationError(
                f"max_items must be >= 0, got {rules.max_items}",
                field="max_items",
            )

        for index, item in enumerate(snapshot.items):
            if not item.price.is_finite() or item.price < 0:
                raise ConfigurationError(
                    f"item {index} has an invalid price: {item.price}",
                    field=f"items[{index}].price",
                )

    def add_validator(self, validator: BaseValidator) -> None:
        """Add a custom validator to the matching chain.

        Raises:
            ValueError: If the validator drives a flag the results do not have
        """
        if isinstance(validator, ItemValidator):
            if validator.flag not in ITEM_FLAGS:
                raise ValueError(f"Unknown item flag '{validator.flag}' for {validator.name}")
            self.item_validators.append(validator)
        elif isinstance(validator, SectionValidator):
            if validator.flag not in SECTION_FLAGS:
                raise ValueError(f"Unknown section flag '{validator.flag}' for {validator.name}")
            self.section_validators.append(validator)
        else:
            raise TypeError(f"Unsupported validator type: {type(validator).__name__}")

    def remove_validator(self, validator_name: str) -> None:
        """Remove a validator by name from both chains."""
        self.item_validators = [v for v in self.item_validators if v.name != validator_name]
        self.section_validators = [v for v in self.section_validators if v.name != validator_name]

    # ── Internals ──

    def _evaluate_item(self, index: int, item: ProductItem, rules: ValidationRuleSet) -> ItemResult:
        flags: dict[str, bool] = {}
        reasons: list[str] = []

        for validator in self.item_validators:
            found = self._run(validator, item, rules)
            flags[validator.flag] = flags.get(validator.flag, True) and not found
            reasons.extend(found)

        return ItemResult(index=index, reasons=reasons, **flags)

    def _evaluate_section(
        self,
        snapshot: ListingSnapshot,
        rules: ValidationRuleSet,
        no_results_indicator_present: bool,
    ) -> SectionResult:
        flags: dict[str, bool] = {}
        reasons: list[str] = []

        for validator in self.section_validators:
            found = self._run(validator, snapshot, rules, no_results_indicator_present)
            flags[validator.flag] = flags.get(validator.flag, True) and not found
            reasons.extend(found)

        return SectionResult(reasons=reasons, **flags)

    @staticmethod
    def _run(validator: Union[ItemValidator, SectionValidator], *args) -> list[str]:
        """Run one validator, turning a crash into a failing reason."""
        try:
            return list(validator.validate(*args))
        except Exception as e:
            logger.error(
                "validator_failed",
                validator=validator.name,
                error=str(e),
            )
            return [f"{validator.name} crashed: {e}"]


# Module-level singleton
validation_engine = ValidationEngine()
