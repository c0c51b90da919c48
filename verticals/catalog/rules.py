"""Catalog business rules — pure functions.

Re-exports the rules engine pattern and adds the discount view.
"""

from decimal import ROUND_HALF_UP, Decimal

from patterns.rules_engine import (
    RuleResult,
    RuleSetResult,
    check_discount_percentage,
    check_duplicate_book,
    check_isbn_available,
    evaluate_rules,
)

__all__ = [
    "RuleResult",
    "RuleSetResult",
    "check_discount_percentage",
    "check_duplicate_book",
    "check_isbn_available",
    "evaluate_rules",
    "discounted_price",
    "genre_discount_summary",
]


def discounted_price(price: float, percentage: float) -> float:
    return price * (1 - percentage / 100)


def genre_discount_summary(genre: str, books: list[dict], percentage: float) -> dict:
    """Aggregate discounted price of ``books`` for the discount view.

    The total is rendered with exactly two decimals, e.g. ``"400.00"``, rounding
    halves up: ``0.125`` becomes ``"0.13"``.
    """
    total = sum(discounted_price(float(b["price"]), percentage) for b in books)
    return {
        "genre": genre,
        "discountPercentage": int(percentage) if percentage.is_integer() else percentage,
        "totalDiscountedPrice": str(
            Decimal(total).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        ),
    }
