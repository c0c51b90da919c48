"""Test book payload validation."""
from verticals.catalog.models.schemas import validate_book


def test_full_payload_accepted(sample_book):
    outcome = validate_book(sample_book)
    assert outcome.ok
    assert outcome.data["title"] == "Clean Code"
    assert outcome.data["publicationYear"] == 2008
    assert outcome.data["ISBN"] == "978-0132350884"
    assert outcome.data["description"] is None


def test_all_missing_fields_reported_in_order():
    outcome = validate_book({})
    assert not outcome.ok
    assert outcome.errors == [
        "Title is required",
        "Author is required",
        "Genre is required",
        "Publication year is required",
        "ISBN is required",
        "Price is required",
    ]


def test_partial_body_rejected_in_full_mode():
    outcome = validate_book({"title": "Incomplete"})
    assert not outcome.ok
    assert "Title is required" not in outcome.errors
    assert "Author is required" in outcome.errors


def test_wrong_types(sample_book):
    outcome = validate_book({**sample_book, "title": 123, "publicationYear": "2008"})
    assert outcome.errors == [
        "Title must be a string",
        "Publication year must be a number",
    ]


def test_short_strings(sample_book):
    outcome = validate_book({**sample_book, "author": "Al", "ISBN": "123"})
    assert outcome.errors == [
        "Author must be at least 3 characters long",
        "ISBN length must be at least 5 characters",
    ]


def test_publication_year_must_be_whole(sample_book):
    outcome = validate_book({**sample_book, "publicationYear": 2008.5})
    assert outcome.errors == ["Publication year must be an integer"]


def test_whole_float_year_becomes_int(sample_book):
    outcome = validate_book({**sample_book, "publicationYear": 2008.0})
    assert outcome.ok
    assert outcome.data["publicationYear"] == 2008
    assert isinstance(outcome.data["publicationYear"], int)


def test_negative_price(sample_book):
    outcome = validate_book({**sample_book, "price": -1})
    assert outcome.errors == ["Price must be a positive number"]


def test_price_with_three_decimals(sample_book):
    for price in (10.999, 0.001, 123456.789):
        outcome = validate_book({**sample_book, "price": price})
        assert outcome.errors == ["Price must have no more than 2 decimal places"]


def test_negative_price_with_three_decimals_rejected(sample_book):
    outcome = validate_book({**sample_book, "price": -1.234})
    assert outcome.errors == [
        "Price must be a positive number",
        "Price must have no more than 2 decimal places",
    ]


def test_two_decimal_prices_accepted(sample_book):
    for price in (0, 19.99, 0.5, 1000):
        assert validate_book({**sample_book, "price": price}).ok


def test_price_must_be_number(sample_book):
    outcome = validate_book({**sample_book, "price": "300"})
    assert outcome.errors == ["Price must be a number"]


def test_description_optional_but_typed(sample_book):
    assert validate_book({**sample_book, "description": "A handbook"}).data["description"] == "A handbook"
    outcome = validate_book({**sample_book, "description": 42})
    assert outcome.errors == ["Description must be a string"]


def test_client_id_ignored(sample_book):
    outcome = validate_book({**sample_book, "id": 99})
    assert outcome.ok
    assert "id" not in outcome.data


def test_partial_only_checks_present_fields():
    outcome = validate_book({"title": "Refactored Code"}, partial=True)
    assert outcome.ok
    assert outcome.data == {"title": "Refactored Code"}


def test_partial_rejects_invalid_present_field():
    outcome = validate_book({"title": "ab", "price": 1.005}, partial=True)
    assert outcome.errors == [
        "Title must be at least 3 characters long",
        "Price must have no more than 2 decimal places",
    ]


def test_partial_rejects_explicit_null():
    outcome = validate_book({"title": None}, partial=True)
    assert outcome.errors == ["Title must be a string"]


def test_non_object_payload():
    assert validate_book([1, 2, 3]).errors == ["Book data must be an object"]
    assert validate_book("book", partial=True).errors == ["Book data must be an object"]
