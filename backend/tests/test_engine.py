"""
Unit tests for the validation engine.
Covers report assembly, price boundaries, section rules and rejected configurations.
"""
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from related_products.validators.base import ItemValidator, SectionValidator
from related_products.validators.engine import ValidationEngine
from related_products.validators.errors import ConfigurationError
from related_products.validators.models import ListingSnapshot, ValidationReport


class TestReportShape:
    """Tests for item ordering and overall pass/fail."""

    def test_one_result_per_item_in_order(self, engine, wallet_rules, make_item):
        snapshot = ListingSnapshot(items=(
            make_item(category="Wallet"),
            make_item(category="Belt"),
            make_item(category="Shoes"),
        ))
        report = engine.evaluate(snapshot, wallet_rules)

        assert len(report.item_results) == 3
        assert [r.index for r in report.item_results] == [0, 1, 2]
        assert [r.category_ok for r in report.item_results] == [True, False, False]

    def test_all_valid_items_pass(self, engine, wallet_rules, make_snapshot):
        report = engine.evaluate(make_snapshot(6), wallet_rules)

        assert report.overall_pass is True
        assert report.failing_items == 0
        assert all(r.reasons == [] for r in report.item_results)
        assert report.verdict.startswith("PASS")

    def test_single_failing_item_fails_report(self, engine, wallet_rules, make_item):
        snapshot = ListingSnapshot(items=(make_item(), make_item(price=Decimal("200"))))
        report = engine.evaluate(snapshot, wallet_rules)

        assert report.overall_pass is False
        assert report.failing_items == 1
        assert report.section_result.passed is True
        assert report.verdict.startswith("FAIL")

    def test_every_failing_check_is_reported(self, engine, wallet_rules, make_item):
        """No short-circuit: one item can fail category, price and fields at once."""
        item = make_item(category="Belt", price=Decimal("10"), has_image=False)
        report = engine.evaluate(ListingSnapshot(items=(item,)), wallet_rules)
        result = report.item_results[0]

        assert not result.category_ok
        assert not result.price_ok
        assert not result.fields_ok
        assert len(result.reasons) == 3

    def test_evaluation_is_idempotent(self, engine, wallet_rules, make_item):
        snapshot = ListingSnapshot(items=(make_item(), make_item(category="Belt")))

        first = engine.evaluate(snapshot, wallet_rules)
        second = engine.evaluate(snapshot, wallet_rules)

        assert first == second

    def test_inputs_are_not_mutated(self, engine, wallet_rules, make_item):
        snapshot = ListingSnapshot(items=(make_item(category=" Wallet "),))
        before = snapshot.model_copy(deep=True)

        engine.evaluate(snapshot, wallet_rules)

        assert snapshot == before

    def test_report_records_rule_set_name(self, engine, wallet_rules, make_snapshot):
        report = engine.evaluate(make_snapshot(1), wallet_rules)
        assert isinstance(report, ValidationReport)
        assert report.rule_set == "wallet"


class TestPriceBoundaries:
    """Tests for the inclusive ±tolerance price band."""

    @pytest.mark.parametrize("price,expected", [
        ("40.00", True),
        ("39.99", False),
        ("60.00", True),
        ("60.01", False),
        ("50", True),
        ("59.999", True),
        ("39.9999", False),
    ])
    def test_price_band(self, engine, wallet_rules, make_item, price, expected):
        snapshot = ListingSnapshot(items=(make_item(price=Decimal(price)),))
        report = engine.evaluate(snapshot, wallet_rules)
        assert report.item_results[0].price_ok is expected

    def test_full_tolerance_allows_free_items(self, engine, wallet_rules, make_item):
        rules = wallet_rules.model_copy(update={"tolerance_fraction": Decimal("1")})
        snapshot = ListingSnapshot(items=(make_item(price=Decimal("0")), make_item(price=Decimal("100"))))

        report = engine.evaluate(snapshot, rules)

        assert [r.price_ok for r in report.item_results] == [True, True]


class TestSectionRules:
    """Tests for count and empty-section handling."""

    def test_six_items_within_limit(self, engine, wallet_rules, make_snapshot):
        report = engine.evaluate(make_snapshot(6), wallet_rules)
        assert report.section_result.count_ok is True

    def test_seven_items_exceed_limit(self, engine, wallet_rules, make_snapshot):
        report = engine.evaluate(make_snapshot(7), wallet_rules)

        assert report.section_result.count_ok is False
        assert report.overall_pass is False
        assert "too many items: 7 shown, maximum is 6" in report.section_result.reasons

    def test_zero_max_items_rejects_any_item(self, engine, wallet_rules, make_snapshot):
        rules = wallet_rules.model_copy(update={"max_items": 0})
        report = engine.evaluate(make_snapshot(1), rules)
        assert report.section_result.count_ok is False

    def test_empty_without_indicator_fails(self, engine, wallet_rules):
        report = engine.evaluate(ListingSnapshot(), wallet_rules, no_results_indicator_present=False)

        assert report.item_results == []
        assert report.section_result.empty_handled_ok is False
        assert report.overall_pass is False

    def test_empty_with_indicator_passes(self, engine, wallet_rules):
        report = engine.evaluate(ListingSnapshot(), wallet_rules, no_results_indicator_present=True)

        assert report.section_result.empty_handled_ok is True
        assert report.overall_pass is True

    def test_indicator_irrelevant_when_items_present(self, engine, wallet_rules, make_snapshot):
        with_indicator = engine.evaluate(make_snapshot(2), wallet_rules, no_results_indicator_present=True)
        without_indicator = engine.evaluate(make_snapshot(2), wallet_rules, no_results_indicator_present=False)

        assert with_indicator.section_result.empty_handled_ok is True
        assert without_indicator.section_result.empty_handled_ok is True

    def test_hidden_section_ignored_unless_required(self, engine, wallet_rules, make_snapshot):
        report = engine.evaluate(make_snapshot(2, section_visible=False), wallet_rules)
        assert report.section_result.visible_ok is True

        strict = wallet_rules.model_copy(update={"require_section_visible": True})
        report = engine.evaluate(make_snapshot(2, section_visible=False), strict)
        assert report.section_result.visible_ok is False
        assert report.overall_pass is False


class TestConfigurationErrors:
    """Tests for inputs rejected before evaluation."""

    @pytest.mark.parametrize("update,field", [
        ({"tolerance_fraction": Decimal("1.5")}, "tolerance_fraction"),
        ({"tolerance_fraction": Decimal("0")}, "tolerance_fraction"),
        ({"tolerance_fraction": Decimal("-0.1")}, "tolerance_fraction"),
        ({"tolerance_fraction": Decimal("NaN")}, "tolerance_fraction"),
        ({"base_price": Decimal("0")}, "base_price"),
        ({"base_price": Decimal("-50")}, "base_price"),
        ({"base_price": Decimal("Infinity")}, "base_price"),
        ({"max_items": -1}, "max_items"),
    ])
    def test_invalid_rules_raise(self, engine, wallet_rules, make_snapshot, update, field):
        rules = wallet_rules.model_copy(update=update)

        with pytest.raises(ConfigurationError) as exc_info:
            engine.evaluate(make_snapshot(1), rules)

        assert exc_info.value.field == field

    def test_negative_item_price_raises(self, engine, wallet_rules, make_item):
        snapshot = ListingSnapshot(items=(make_item(), make_item(price=Decimal("-1"))))

        with pytest.raises(ConfigurationError) as exc_info:
            engine.evaluate(snapshot, wallet_rules)

        assert exc_info.value.field == "items[1].price"

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)

    def test_rejection_is_logged(self, engine, wallet_rules, make_snapshot):
        rules = wallet_rules.model_copy(update={"tolerance_fraction": Decimal("1.5")})

        with capture_logs() as logs:
            with pytest.raises(ConfigurationError):
                engine.evaluate(make_snapshot(1), rules)

        assert logs[0]["event"] == "evaluation_rejected"
        assert logs[0]["field"] == "tolerance_fraction"
        assert not any(log["event"] == "evaluation_complete" for log in logs)


class ExplodingValidator(ItemValidator):
    @property
    def name(self) -> str:
        return "ExplodingValidator"

    @property
    def flag(self) -> str:
        return "price_ok"

    def validate(self, item, rules):
        raise RuntimeError("boom")


class ShortTitleValidator(ItemValidator):
    @property
    def name(self) -> str:
        return "ShortTitleValidator"

    @property
    def flag(self) -> str:
        return "fields_ok"

    def validate(self, item, rules):
        return ["title too short"] if len(item.title) < 5 else []


class UnknownFlagValidator(SectionValidator):
    @property
    def name(self) -> str:
        return "UnknownFlagValidator"

    @property
    def flag(self) -> str:
        return "sparkle_ok"

    def validate(self, snapshot, rules, no_results_indicator_present=False):
        return []


class TestValidatorChain:
    """Tests for adding, removing and isolating validators."""

    def test_default_chain(self, engine):
        assert [v.name for v in engine.item_validators] == [
            "CategoryValidator",
            "PriceBandValidator",
            "FieldCompletenessValidator",
            "InteractiveActionValidator",
        ]
        assert [v.name for v in engine.section_validators] == [
            "ItemCountValidator",
            "EmptySectionValidator",
            "SectionVisibilityValidator",
        ]

    def test_crashing_validator_fails_its_flag_only(self, wallet_rules, make_snapshot):
        engine = ValidationEngine(item_validators=[ExplodingValidator()])

        with capture_logs() as logs:
            report = engine.evaluate(make_snapshot(1), wallet_rules)

        result = report.item_results[0]
        assert result.price_ok is False
        assert result.category_ok is True
        assert result.reasons == ["ExplodingValidator crashed: boom"]
        assert any(log["event"] == "validator_failed" for log in logs)

    def test_added_validator_shares_flag(self, engine, wallet_rules, make_item):
        engine.add_validator(ShortTitleValidator())
        snapshot = ListingSnapshot(items=(make_item(title="Bag"),))

        result = engine.evaluate(snapshot, wallet_rules).item_results[0]

        assert result.fields_ok is False
        assert "title too short" in result.reasons

    def test_unknown_flag_rejected(self, engine):
        with pytest.raises(ValueError):
            engine.add_validator(UnknownFlagValidator())

    def test_remove_validator(self, engine, wallet_rules, make_item):
        engine.remove_validator("CategoryValidator")
        snapshot = ListingSnapshot(items=(make_item(category="Belt"),))

        report = engine.evaluate(snapshot, wallet_rules)

        assert report.item_results[0].category_ok is True
        assert report.overall_pass is True

    def test_empty_chains_allowed(self, wallet_rules, make_snapshot):
        engine = ValidationEngine(item_validators=[], section_validators=[])
        report = engine.evaluate(make_snapshot(10), wallet_rules)

        assert report.overall_pass is True
        assert len(report.item_results) == 10
