"""Data models for the product creation form."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

CATEGORIES = ["Economy", "SUV", "Luxury", "Van", "Other"]

PLACEHOLDER_IMAGE = "https://via.placeholder.com/400?text=No+Image"


class Field(str, Enum):
    """Top-level form fields, valued by their wire name."""

    NAME = "name"
    BRAND = "brand"
    PRICE = "price"
    DESCRIPTION = "description"
    IMAGE = "image"
    CATEGORY = "category"
    IS_RENTABLE = "isRentable"


class RentalField(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"


class Phase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    NAVIGATED = "navigated"


@dataclass(frozen=True)
class RentalPrice:
    hourly: str = ""
    daily: str = ""


@dataclass(frozen=True)
class FormState:
    brand: str = ""
    name: str = ""
    price: str = ""
    description: str = ""
    image: str = ""
    category: str = ""
    is_rentable: bool = False
    rental_price: RentalPrice = field(default_factory=RentalPrice)

    def to_dict(self) -> dict:
        """Raw field values keyed by wire name, as the page shows them."""
        return {
            "brand": self.brand,
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "image": self.image,
            "category": self.category,
            "isRentable": self.is_rentable,
            "rentalPrice": {
                "hourly": self.rental_price.hourly,
                "daily": self.rental_price.daily,
            },
        }


@dataclass(frozen=True)
class TopLevelField:
    field: Field
    value: str | bool


@dataclass(frozen=True)
class RentalSubfield:
    field: RentalField
    value: str


FieldUpdate = TopLevelField | RentalSubfield


@dataclass(frozen=True)
class PageState:
    form: FormState = field(default_factory=FormState)
    errors: dict[str, str] = field(default_factory=dict)
    submission_error: str = ""
    submitting: bool = False
    phase: Phase = Phase.IDLE
    redirect_to: str | None = None

    def to_dict(self) -> dict:
        return {
            "form": self.form.to_dict(),
            "errors": dict(self.errors),
            "submission_error": self.submission_error,
            "submitting": self.submitting,
            "phase": self.phase.value,
            "redirect": self.redirect_to,
        }
