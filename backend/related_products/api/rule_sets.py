"""List and inspect named rule sets."""

from fastapi import APIRouter, HTTPException

from related_products.config import get_settings
from related_products.models.responses import RuleSetListResponse
from related_products.validators.models import ValidationRuleSet
from related_products.validators.rulesets import get_all_rule_sets, load_rule_set

router = APIRouter()


@router.get("/rule-sets", response_model=RuleSetListResponse)
def list_rule_sets():
    """List every rule set in the catalogue."""
    return RuleSetListResponse(
        rule_sets=get_all_rule_sets(),
        default=get_settings().DEFAULT_RULE_SET,
    )


@router.get("/rule-sets/{name}", response_model=ValidationRuleSet)
def get_rule_set(name: str):
    """Get one rule set by name."""
    rule_set = load_rule_set(name)
    if rule_set is None:
        raise HTTPException(status_code=404, detail=f"Rule set '{name}' not found")
    return rule_set
