"""Driver-side helpers that turn scraped related-product cards into snapshots."""

from related_products.snapshots.extraction import (
    RawProductCard,
    build_snapshot,
    card_to_item,
    parse_actions,
    parse_price,
)

__all__ = ["RawProductCard", "build_snapshot", "card_to_item", "parse_actions", "parse_price"]
