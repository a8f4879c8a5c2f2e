"""Apply field changes to the page state."""

from __future__ import annotations

from dataclasses import replace

from .models import (
    Field,
    FieldUpdate,
    PageState,
    RentalField,
    RentalSubfield,
    TopLevelField,
)

RENTAL_PREFIX = "rentalPrice."

_ATTRS = {
    Field.NAME: "name",
    Field.BRAND: "brand",
    Field.PRICE: "price",
    Field.DESCRIPTION: "description",
    Field.IMAGE: "image",
    Field.CATEGORY: "category",
    Field.IS_RENTABLE: "is_rentable",
}


class UnknownField(ValueError):
    """Raised for a field event whose name the form does not have."""


def parse_update(
    name: str, value: str = "", type: str = "text", checked: bool = False
) -> FieldUpdate:
    """Turn a raw input event into a tagged update.

    Only ``isRentable`` is a checkbox and carries its checked state; a
    checkbox event for any other field raises UnknownField.
    ``rentalPrice.<sub>`` names address the nested rental prices.
    """
    if name.startswith(RENTAL_PREFIX):
        try:
            sub = RentalField(name[len(RENTAL_PREFIX):])
        except ValueError:
            raise UnknownField(name) from None
        return RentalSubfield(sub, value)

    try:
        top = Field(name)
    except ValueError:
        raise UnknownField(name) from None

    if top is Field.IS_RENTABLE:
        return TopLevelField(top, checked is True)
    if type == "checkbox":
        raise UnknownField(f"{name} is not a checkbox")
    return TopLevelField(top, value)


def apply_update(page: PageState, update: FieldUpdate) -> PageState:
    """Return a new page state with the update applied.

    Any edit also clears the last submission error, so a failed submit
    reads as idle again before the next attempt.
    """
    form = page.form
    if isinstance(update, RentalSubfield):
        if not isinstance(update.value, str):
            raise TypeError(f"rentalPrice.{update.field.value} takes text, got {update.value!r}")
        rental = replace(form.rental_price, **{update.field.value: update.value})
        form = replace(form, rental_price=rental)
    elif isinstance(update, TopLevelField):
        value = update.value
        if update.field is Field.IS_RENTABLE:
            value = bool(value)
        elif not isinstance(value, str):
            raise TypeError(f"{update.field.value} takes text, got {value!r}")
        form = replace(form, **{_ATTRS[update.field]: value})
    else:
        raise TypeError(f"unsupported update: {update!r}")

    return replace(page, form=form, submission_error="")
