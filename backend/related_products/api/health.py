"""Health check endpoint."""

import time

from fastapi import APIRouter

from related_products import __version__
from related_products.config import get_settings
from related_products.models.responses import HealthDependency, HealthResponse
from related_products.validators.rulesets import get_all_rule_sets, load_rule_set

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
def health_check():
    """System health check with rule-set catalogue status."""
    dependencies = {}

    start = time.time()
    names = get_all_rule_sets()
    latency = (time.time() - start) * 1000
    default_name = get_settings().DEFAULT_RULE_SET

    if not names:
        dependencies["rule_sets"] = HealthDependency(status="unhealthy", message="No rule sets loaded")
    elif load_rule_set(default_name) is None:
        dependencies["rule_sets"] = HealthDependency(
            status="degraded",
            latency_ms=round(latency, 2),
            message=f"Default rule set '{default_name}' not found",
        )
    else:
        dependencies["rule_sets"] = HealthDependency(status="healthy", latency_ms=round(latency, 2))

    # Overall status
    all_healthy = all(d.status == "healthy" for d in dependencies.values())
    any_unhealthy = any(d.status == "unhealthy" for d in dependencies.values())

    if all_healthy:
        status = "healthy"
    elif any_unhealthy:
        status = "unhealthy"
    else:
        status = "degraded"

    return HealthResponse(
        status=status,
        version=__version__,
        uptime_seconds=round(time.time() - _start_time, 2),
        dependencies=dependencies,
    )
