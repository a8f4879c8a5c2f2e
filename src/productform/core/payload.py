"""Build the create-product request body from a validated form."""

from __future__ import annotations

from .models import PLACEHOLDER_IMAGE, FormState
from .validation import InvalidNumber, parse_number


def _amount(raw: str) -> float:
    # Rental prices of a non-rentable product are never validated.
    try:
        value = parse_number(raw)
    except InvalidNumber:
        return 0
    return value if value is not None else 0


def build_payload(form: FormState) -> dict:
    """Serialize the form for the products endpoint.

    Numeric fields become numbers (absent rental prices become 0) and an
    empty image is replaced with the placeholder URL. Expects a form that
    passed validation; an unparseable price raises InvalidNumber.
    """
    return {
        "brand": form.brand,
        "name": form.name,
        "price": parse_number(form.price),
        "description": form.description,
        "image": form.image.strip() or PLACEHOLDER_IMAGE,
        "category": form.category,
        "isRentable": form.is_rentable,
        "rentalPrice": {
            "hourly": _amount(form.rental_price.hourly),
            "daily": _amount(form.rental_price.daily),
        },
    }
