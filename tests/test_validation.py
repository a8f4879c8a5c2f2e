import pytest

from productform.core.models import FormState, RentalPrice
from productform.core.validation import InvalidNumber, parse_number, validate_form


def valid_form(**overrides) -> FormState:
    values = dict(
        brand="Toyota",
        name="Corolla",
        price="19999.99",
        description="Compact sedan",
        category="Economy",
    )
    values.update(overrides)
    return FormState(**values)


# --- parse_number ---

def test_parse_number_empty_is_absent():
    assert parse_number("") is None
    assert parse_number("   ") is None


@pytest.mark.parametrize("raw, expected", [("10", 10.0), (" 2.5 ", 2.5), ("-3", -3.0), ("0", 0.0)])
def test_parse_number_values(raw, expected):
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "12abc", "nan", "inf", "1,5"])
def test_parse_number_rejects_garbage(raw):
    with pytest.raises(InvalidNumber):
        parse_number(raw)


# --- validate_form ---

def test_valid_form_has_no_errors():
    assert validate_form(valid_form()) == {}


def test_empty_form_reports_every_required_field():
    errors = validate_form(FormState())
    assert set(errors) == {"name", "brand", "price", "description", "category"}
    assert errors["price"] == "Price is required"


@pytest.mark.parametrize("field", ["name", "brand", "description", "category"])
def test_required_text_fields(field):
    errors = validate_form(valid_form(**{field: ""}))
    assert field in errors


def test_whitespace_only_counts_as_empty():
    errors = validate_form(valid_form(name="   "))
    assert errors == {"name": "Product name is required"}


@pytest.mark.parametrize("price", ["0", "-1", "abc", "0.0", "nan"])
def test_bad_prices_are_reported(price):
    errors = validate_form(valid_form(price=price))
    assert errors == {"price": "Price must be a positive number"}


@pytest.mark.parametrize("price", ["0.01", "1", "250", "1e3"])
def test_positive_prices_pass(price):
    assert "price" not in validate_form(valid_form(price=price))


def test_unknown_category_is_rejected():
    errors = validate_form(valid_form(category="Truck"))
    assert errors == {"category": "Select a valid product category"}


def test_rentable_needs_at_least_one_rental_price():
    errors = validate_form(valid_form(is_rentable=True))
    assert errors == {
        "rentalPrice": "At least one rental price (hourly or daily) is required"
    }


def test_rentable_with_only_hourly_passes():
    form = valid_form(is_rentable=True, rental_price=RentalPrice(hourly="10", daily=""))
    assert validate_form(form) == {}


def test_rentable_with_only_daily_passes():
    form = valid_form(is_rentable=True, rental_price=RentalPrice(daily="80"))
    assert validate_form(form) == {}


def test_rental_prices_checked_independently():
    form = valid_form(is_rentable=True, rental_price=RentalPrice(hourly="-5", daily="abc"))
    errors = validate_form(form)
    assert errors == {
        "rentalPrice.hourly": "Hourly rental price must be a positive number",
        "rentalPrice.daily": "Daily rental price must be a positive number",
    }


def test_one_bad_rental_price_alongside_a_good_one():
    form = valid_form(is_rentable=True, rental_price=RentalPrice(hourly="12", daily="0"))
    assert set(validate_form(form)) == {"rentalPrice.daily"}


def test_not_rentable_skips_rental_fields():
    form = valid_form(is_rentable=False, rental_price=RentalPrice(hourly="junk", daily="-1"))
    assert validate_form(form) == {}


def test_rules_are_not_short_circuited():
    form = FormState(price="-2", is_rentable=True, rental_price=RentalPrice(hourly="x"))
    errors = validate_form(form)
    assert set(errors) == {
        "name",
        "brand",
        "price",
        "description",
        "category",
        "rentalPrice.hourly",
    }
