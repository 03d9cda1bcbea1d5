"""API response models."""

from typing import Literal, Optional

from pydantic import BaseModel

from related_products.validators.models import ValidationReport, ValidationRuleSet


class EvaluateResponse(BaseModel):
    """Report together with the rule set it was produced from."""

    rule_set: ValidationRuleSet
    report: ValidationReport


class RuleSetListResponse(BaseModel):
    """Names of all rule sets in the catalogue."""

    rule_sets: list[str]
    default: str


class HealthDependency(BaseModel):
    """Health status of a single dependency."""

    status: Literal["healthy", "unhealthy", "degraded"]
    latency_ms: Optional[float] = None
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy", "degraded"]
    version: str
    uptime_seconds: float
    dependencies: dict[str, HealthDependency]
