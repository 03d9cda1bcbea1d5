"""Main API router — combines all endpoint routers."""

from fastapi import APIRouter

from related_products.api.evaluations import router as evaluations_router
from related_products.api.health import router as health_router
from related_products.api.rule_sets import router as rule_sets_router

api_router = APIRouter()

# Health check
api_router.include_router(health_router, tags=["Health"])

# Rule-set catalogue
api_router.include_router(rule_sets_router, tags=["Rule Sets"])

# Snapshot evaluation
api_router.include_router(evaluations_router, tags=["Evaluations"])
