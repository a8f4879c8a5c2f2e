"""Synchronous field validation for the product form."""

from __future__ import annotations

import math

from .models import CATEGORIES, FormState


class InvalidNumber(ValueError):
    """Raised when populated text does not parse as a finite number."""


def parse_number(raw: str) -> float | None:
    """Parse a numeric form field.

    Empty (or whitespace-only) input is absent and returns None, never zero.
    Anything else must be a finite decimal number or InvalidNumber is raised.
    """
    text = raw.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError as e:
        raise InvalidNumber(f"not a number: {raw!r}") from e
    if not math.isfinite(value):
        raise InvalidNumber(f"not a finite number: {raw!r}")
    return value


def _is_positive(raw: str) -> bool:
    try:
        value = parse_number(raw)
    except InvalidNumber:
        return False
    return value is not None and value > 0


def validate_form(form: FormState) -> dict[str, str]:
    """Check every rule against the form and return field -> message.

    All rules run on each pass; an empty mapping means the form is valid.
    """
    errors: dict[str, str] = {}

    if not form.name.strip():
        errors["name"] = "Product name is required"
    if not form.brand.strip():
        errors["brand"] = "Brand is required"

    if not form.price.strip():
        errors["price"] = "Price is required"
    elif not _is_positive(form.price):
        errors["price"] = "Price must be a positive number"

    if not form.description.strip():
        errors["description"] = "Description is required"

    if not form.category.strip():
        errors["category"] = "Product category is required"
    elif form.category not in CATEGORIES:
        errors["category"] = "Select a valid product category"

    if form.is_rentable:
        hourly = form.rental_price.hourly
        daily = form.rental_price.daily
        if not hourly.strip() and not daily.strip():
            errors["rentalPrice"] = "At least one rental price (hourly or daily) is required"
        else:
            if hourly.strip() and not _is_positive(hourly):
                errors["rentalPrice.hourly"] = "Hourly rental price must be a positive number"
            if daily.strip() and not _is_positive(daily):
                errors["rentalPrice.daily"] = "Daily rental price must be a positive number"

    return errors
