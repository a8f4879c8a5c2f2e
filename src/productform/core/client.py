"""Client for the storefront's product-creation endpoint."""

from __future__ import annotations

import httpx
import structlog

log = structlog.get_logger()

DEFAULT_ERROR = "Failed to add product"


class ProductCreateError(Exception):
    """The products endpoint answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(resp: httpx.Response) -> str:
    """Pull the ``error`` string out of a failure body, if there is one."""
    try:
        data = resp.json()
    except ValueError:
        return DEFAULT_ERROR
    if isinstance(data, dict):
        error = data.get("error")
        if isinstance(error, str) and error:
            return error
    return DEFAULT_ERROR


class ProductsClient:
    """Creates products by POSTing JSON to the storefront API.

    A fresh ``httpx.AsyncClient`` is opened per request; pass ``transport``
    to route requests somewhere other than the network.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport

    async def create_product(self, payload: dict) -> None:
        """Send one create request.

        Any 2xx status is success and the body is ignored. Other statuses
        raise ProductCreateError; transport failures propagate as
        ``httpx.HTTPError``.
        """
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            resp = await client.post(self.endpoint, json=payload)

        if resp.is_success:
            log.debug("product_endpoint_ok", status=resp.status_code)
            return

        message = _error_message(resp)
        log.debug("product_endpoint_error", status=resp.status_code, error=message)
        raise ProductCreateError(message, status_code=resp.status_code)
