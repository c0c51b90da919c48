"""Pure-function rules engine pattern.

Rules are stateless functions: (entity, context) -> RuleResult.
No database, no side effects. This makes them:
- Trivially testable (pure input/output)
- Composable (chain multiple rules)
- Auditable (deterministic, explainable)

Example domain: a book catalog checking duplicates and discount requests.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Iterable


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0

    @property
    def messages(self) -> list[str]:
        return [r.message for r in self.failed]


# ---------------------------------------------------------------------------
# Catalog rules
# ---------------------------------------------------------------------------

def _fold(value: Any) -> str:
    return str(value or "").lower()


def check_duplicate_book(
    candidate: dict,
    existing: Iterable[dict],
    exclude_id: int | None = None,
) -> RuleResult:
    """Reject a (title, author) pair already present in the catalog.

    Comparison is case-insensitive. The record with ``exclude_id`` is
    skipped so an update does not collide with itself.
    """
    title = _fold(candidate.get("title"))
    author = _fold(candidate.get("author"))

    for book in existing:
        if exclude_id is not None and book.get("id") == exclude_id:
            continue
        if _fold(book.get("title")) == title and _fold(book.get("author")) == author:
            return RuleResult(
                passed=False,
                rule_name="duplicate_book",
                message=(
                    f"A book with the title {candidate.get('title')} "
                    f"by {candidate.get('author')} already exists."
                ),
                details={"conflicting_id": book.get("id")},
            )

    return RuleResult(passed=True, rule_name="duplicate_book", message="No duplicate found")


def check_isbn_available(
    isbn: str | None,
    existing: Iterable[dict],
    exclude_id: int | None = None,
) -> RuleResult:
    """Reject an ISBN already held by another record (exact match)."""
    for book in existing:
        if exclude_id is not None and book.get("id") == exclude_id:
            continue
        if isbn is not None and book.get("ISBN") == isbn:
            return RuleResult(
                passed=False,
                rule_name="isbn_available",
                message=f"A book with ISBN {isbn} already exists.",
                details={"conflicting_id": book.get("id")},
            )

    return RuleResult(passed=True, rule_name="isbn_available", message="ISBN available")


def check_discount_percentage(raw: str | None) -> RuleResult:
    """Check a discount query value is a finite number in [0, 100].

    On success ``details["percentage"]`` holds the parsed value.
    """
    try:
        pct = float(raw) if raw is not None else math.nan
    except ValueError:
        pct = math.nan

    passed = math.isfinite(pct) and 0 <= pct <= 100
    return RuleResult(
        passed=passed,
        rule_name="discount_percentage",
        message=(
            f"Discount of {pct:g}% accepted"
            if passed
            else "Discount must be a valid number between 0 and 100"
        ),
        details={"percentage": pct} if passed else {"raw": raw},
    )


# ---------------------------------------------------------------------------
# Rule composition
# ---------------------------------------------------------------------------

def evaluate_rules(*rules: RuleResult) -> RuleSetResult:
    """Compose multiple rule results into a single aggregate.

    Example::

        result = evaluate_rules(
            check_duplicate_book(candidate, books),
            check_isbn_available(candidate["ISBN"], books),
        )
        if not result.all_passed:
            return conflict(result.messages[0])
    """
    return RuleSetResult(
        all_passed=all(r.passed for r in rules),
        results=list(rules),
    )
