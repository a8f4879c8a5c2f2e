"""Submission flow for one visit to the Add New Product page."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

import httpx
import structlog

from .client import ProductCreateError, ProductsClient
from .form import apply_update
from .models import FieldUpdate, PageState, Phase
from .payload import build_payload
from .validation import validate_form

log = structlog.get_logger()

TRANSPORT_ERROR = "Failed to add product. Please try again."


class ProductFormPage:
    """Holds the page state of one form visit and drives its submission.

    Flow: idle -> validating -> idle (invalid) or submitting ->
    navigated (success) or idle with a submission error (failure).
    Only one submission may be in flight at a time.
    """

    def __init__(
        self,
        client: ProductsClient,
        navigate: Callable[[str], None],
        home_url: str = "/",
    ) -> None:
        self.client = client
        self.navigate = navigate
        self.home_url = home_url
        self.state = PageState()

    def change(self, update: FieldUpdate) -> PageState:
        self.state = apply_update(self.state, update)
        return self.state

    async def submit(self) -> PageState:
        """Validate and, if valid, create the product.

        A submit while another is in flight is ignored.
        """
        if self.state.submitting:
            log.warning("submit_ignored_in_flight")
            return self.state

        self.state = replace(self.state, phase=Phase.VALIDATING)
        errors = validate_form(self.state.form)
        self.state = replace(self.state, errors=errors)
        if errors:
            log.info("form_invalid", fields=sorted(errors))
            self.state = replace(self.state, phase=Phase.IDLE)
            return self.state

        self.state = replace(
            self.state, submitting=True, submission_error="", phase=Phase.SUBMITTING
        )
        try:
            payload = build_payload(self.state.form)
            await self.client.create_product(payload)
        except ProductCreateError as e:
            log.warning("product_create_failed", error=e.message, status=e.status_code)
            self._fail(e.message)
        except httpx.HTTPError as e:
            log.warning("product_create_failed", error=str(e))
            self._fail(str(e) or TRANSPORT_ERROR)
        except Exception as e:
            log.exception("product_create_failed", error=str(e))
            self._fail(str(e) or TRANSPORT_ERROR)
        else:
            log.info("product_created", name=payload["name"], category=payload["category"])
            self.state = replace(self.state, phase=Phase.NAVIGATED, redirect_to=self.home_url)
            self.navigate(self.home_url)
        finally:
            self.state = replace(self.state, submitting=False)

        return self.state

    def _fail(self, message: str) -> None:
        self.state = replace(self.state, submission_error=message, phase=Phase.IDLE)
