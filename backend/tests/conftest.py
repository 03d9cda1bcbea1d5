"""
Pytest configuration and fixtures for backend tests
"""
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from related_products.config import get_settings
from related_products.main import app
from related_products.validators.engine import ValidationEngine
from related_products.validators.models import (
    InteractiveAction,
    ListingSnapshot,
    ProductItem,
    ValidationRuleSet,
)
from related_products.validators.rulesets import clear_cache


@pytest.fixture(autouse=True)
def reset_caches():
    """Drop cached settings and rule sets so env changes apply per test"""
    get_settings.cache_clear()
    clear_cache()
    yield
    get_settings.cache_clear()
    clear_cache()


@pytest.fixture
def client():
    """Create a test client for the FastAPI application"""
    return TestClient(app)


@pytest.fixture
def engine():
    return ValidationEngine()


@pytest.fixture
def wallet_rules():
    """The wallet configuration: $50 base, ±20%, at most six items"""
    return ValidationRuleSet(
        name="wallet",
        expected_category="Wallet",
        base_price=Decimal("50.00"),
        tolerance_fraction=Decimal("0.20"),
        max_items=6,
        require_fields_complete=True,
    )


@pytest.fixture
def make_item():
    """Factory for a valid wallet card; override any field by keyword"""
    def _make(**overrides):
        fields = {
            "title": "Leather Bifold Wallet",
            "category": "Wallet",
            "price": Decimal("50.00"),
            "has_image": True,
            "has_visible_title": True,
            "has_visible_price": True,
            "interactive_actions": frozenset(
                {InteractiveAction.ADD_TO_CART, InteractiveAction.ADD_TO_WATCHLIST}
            ),
        }
        fields.update(overrides)
        return ProductItem(**fields)

    return _make


@pytest.fixture
def make_snapshot(make_item):
    """Factory for a snapshot of `count` valid wallet cards"""
    def _make(count=3, section_visible=True):
        return ListingSnapshot(
            items=tuple(make_item(title=f"Wallet {i}") for i in range(count)),
            section_visible=section_visible,
        )

    return _make


@pytest.fixture
def sample_snapshot_payload():
    """A typed snapshot as a driver would post it"""
    return {
        "items": [
            {
                "title": "Slim Card Wallet",
                "category": "Wallet",
                "price": "45.00",
                "has_image": True,
                "has_visible_title": True,
                "has_visible_price": True,
                "interactive_actions": ["add_to_cart", "add_to_watchlist"],
            },
            {
                "title": "Reversible Belt",
                "category": "Belt",
                "price": "200.00",
                "has_image": True,
                "has_visible_title": True,
                "has_visible_price": True,
                "interactive_actions": ["add_to_cart"],
            },
        ],
        "section_visible": True,
    }


@pytest.fixture
def sample_raw_cards():
    """Cards exactly as scraped from the related-products section"""
    return [
        {
            "title": "  Trifold Wallet  ",
            "category": " Wallet ",
            "price_text": "US $42.50",
            "image_visible": True,
            "title_visible": True,
            "price_visible": True,
            "actions": ["Add to cart", "Add to Watchlist"],
        },
        {
            "title": "Travel Wallet",
            "category": "Wallet",
            "price_text": "$1,250.00",
            "actions": ["Add to cart"],
        },
    ]
