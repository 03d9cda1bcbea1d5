"""Evaluations API: validate a related-products snapshot against a rule set.

Drivers running out of process (for example a browser suite written in another
language) post what they extracted and get the full report back. Validation
failures are normal 200 responses with overall_pass=false; malformed rule sets
are rejected with 422 by the ConfigurationError handler in main.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, HTTPException

from related_products.config import get_settings
from related_products.models.requests import EvaluateRawRequest, EvaluateRequest
from related_products.models.responses import EvaluateResponse
from related_products.snapshots.extraction import build_snapshot
from related_products.validators.engine import validation_engine
from related_products.validators.models import ValidationRuleSet
from related_products.validators.rulesets import load_rule_set

logger = structlog.get_logger()

router = APIRouter()


def _resolve_rules(rules: Optional[ValidationRuleSet], rule_set: Optional[str]) -> ValidationRuleSet:
    """Pick explicit rules, then a named rule set, then the default."""
    if rules is not None:
        return rules

    name = rule_set or get_settings().DEFAULT_RULE_SET
    resolved = load_rule_set(name)
    if resolved is None:
        raise HTTPException(status_code=404, detail=f"Rule set '{name}' not found")
    return resolved


@router.post("/evaluations", response_model=EvaluateResponse)
def evaluate_snapshot(request: EvaluateRequest):
    """Evaluate a typed snapshot."""
    rules = _resolve_rules(request.rules, request.rule_set)

    report = validation_engine.evaluate(
        request.snapshot,
        rules,
        no_results_indicator_present=request.no_results_indicator_present,
    )

    return EvaluateResponse(rule_set=rules, report=report)


@router.post("/evaluations/raw", response_model=EvaluateResponse)
def evaluate_raw_cards(request: EvaluateRawRequest):
    """Parse scraped cards into a snapshot, then evaluate it."""
    rules = _resolve_rules(request.rules, request.rule_set)
    snapshot = build_snapshot(request.cards, section_visible=request.section_visible)

    logger.info("raw_cards_parsed", cards=len(request.cards), rule_set=rules.name)

    report = validation_engine.evaluate(
        snapshot,
        rules,
        no_results_indicator_present=request.no_results_indicator_present,
    )

    return EvaluateResponse(rule_set=rules, report=report)
