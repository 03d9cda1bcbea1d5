"""Turn raw scraped card records into typed ProductItems.

A page driver scrapes text and visibility flags from each related-product card
(title, category label, price text such as "$45.99", which buttons it found).
This module trims and parses that raw data once, so the validation engine only
ever sees typed values.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Union

from pydantic import BaseModel, Field

from related_products.validators.models import InteractiveAction, ListingSnapshot, ProductItem

# First amount in the text: "US $1,234.50", "$40.00 to $55.00", "12,50 €"
_AMOUNT_RE = re.compile(r"\d[\d.,]*")
_SPACE_RE = re.compile(r"\s+")

_ACTION_LABELS = {
    "add to cart": InteractiveAction.ADD_TO_CART,
    "add to watchlist": InteractiveAction.ADD_TO_WATCHLIST,
}


class RawProductCard(BaseModel):
    """What a page driver scraped from one related-product card."""

    title: Optional[str] = None
    category: Optional[str] = None
    price_text: Optional[str] = None
    image_visible: bool = True
    title_visible: bool = True
    price_visible: bool = True
    actions: list[str] = Field(default_factory=list, description="Button labels found on the card")


def parse_price(value: Union[str, int, float, Decimal, None]) -> Optional[Decimal]:
    """Parse a displayed price into a Decimal.

    Currency symbols, codes and thousands separators are dropped; for price
    ranges the first amount is used. Both "1,234.50" and "1.234,50" are read
    as 1234.50:

    - with both "," and "." present, the later one is the decimal mark
    - a single separator followed by exactly three digits is a thousands
      separator ("$1,250", "1.500 €" are 1250 and 1500)
    - any other single separator is the decimal mark ("12,50 €" is 12.50)
    - a separator repeated ("1,000,000") is always a thousands separator

    Returns:
        The amount, or None if the value holds no finite number
    """
    if value is None:
        return None

    if isinstance(value, Decimal):
        return value if value.is_finite() else None

    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return Decimal(value)

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return Decimal(str(value))

    if isinstance(value, str):
        match = _AMOUNT_RE.search(value)
        if not match:
            return None
        try:
            return Decimal(_normalize_amount(match.group()))
        except InvalidOperation:
            return None

    return None


def _normalize_amount(amount: str) -> str:
    """Rewrite a matched amount with "." as the only separator."""
    amount = amount.rstrip(".,")
    comma, dot = amount.rfind(","), amount.rfind(".")

    if comma >= 0 and dot >= 0:
        decimal_mark = "," if comma > dot else "."
    elif comma >= 0 or dot >= 0:
        decimal_mark = "," if comma >= 0 else "."
        position = max(comma, dot)
        if amount.count(decimal_mark) > 1 or len(amount) - position - 1 == 3:
            decimal_mark = None
    else:
        return amount

    thousands = {",", "."} - {decimal_mark}
    for separator in thousands:
        amount = amount.replace(separator, "")
    if decimal_mark == ",":
        amount = amount.replace(",", ".")
    return amount


def parse_actions(labels: Iterable[str]) -> frozenset[InteractiveAction]:
    """Map button labels ("Add to cart", " Add to Watchlist ") to actions.

    Unknown labels are ignored.
    """
    actions = set()
    for label in labels:
        key = _SPACE_RE.sub(" ", (label or "").strip()).lower()
        action = _ACTION_LABELS.get(key)
        if action is not None:
            actions.add(action)
    return frozenset(actions)


def card_to_item(card: RawProductCard) -> ProductItem:
    """Build a ProductItem from one scraped card.

    A card whose price text cannot be parsed is given price 0 and treated as
    not showing a price.
    """
    price = parse_price(card.price_text)
    title = (card.title or "").strip()

    return ProductItem(
        title=title,
        category=(card.category or "").strip(),
        price=price if price is not None else Decimal(0),
        has_image=card.image_visible,
        has_visible_title=card.title_visible and bool(title),
        has_visible_price=card.price_visible and price is not None,
        interactive_actions=parse_actions(card.actions),
    )


def build_snapshot(cards: Iterable[RawProductCard], section_visible: bool = True) -> ListingSnapshot:
    """Capture scraped cards, in display order, as an immutable snapshot."""
    return ListingSnapshot(
        items=tuple(card_to_item(card) for card in cards),
        section_visible=section_visible,
    )
