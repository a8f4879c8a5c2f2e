"""FastAPI web application for the Add New Product form."""

from __future__ import annotations

import os
from datetime import datetime, timezone

from dotenv import load_dotenv
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from ..core.client import ProductsClient
from ..core.form import UnknownField, parse_update
from ..core.models import CATEGORIES
from ..core.submit import ProductFormPage

load_dotenv()

log = structlog.get_logger()

STATIC_DIR = Path(__file__).parent / "static"
MAX_BODY_BYTES = 20_000  # ~20 KB max field event body

PRODUCTS_API_URL = os.environ.get("PRODUCTS_API_URL", "http://localhost:3000/api/products")
REQUEST_TIMEOUT = float(os.environ.get("REQUEST_TIMEOUT", "10"))  # seconds
HOME_URL = os.environ.get("HOME_URL", "/")
FORM_TTL = int(os.environ.get("FORM_TTL", "1800"))  # 30 minutes
MAX_FORMS = int(os.environ.get("MAX_FORMS", "500"))  # cap open forms to bound memory


@dataclass
class FormSession:
    created_at: float = field(default_factory=time.time)
    redirect: str | None = None
    page: ProductFormPage = field(init=False)

    def __post_init__(self) -> None:
        self.page = ProductFormPage(products_client, self.navigate, home_url=HOME_URL)

    def navigate(self, url: str) -> None:
        self.redirect = url


# In-memory form store, one entry per page visit
forms: dict[str, FormSession] = {}

products_client = ProductsClient(PRODUCTS_API_URL, timeout=REQUEST_TIMEOUT)


def _clean_expired() -> None:
    now = time.time()
    expired = [fid for fid, s in forms.items() if now - s.created_at > FORM_TTL]
    for fid in expired:
        forms.pop(fid, None)


def _get_form(form_id: str) -> FormSession | None:
    session = forms.get(form_id)
    if not session:
        return None
    if time.time() - session.created_at > FORM_TTL:
        forms.pop(form_id, None)
        return None
    return session


def _not_found() -> JSONResponse:
    return JSONResponse({"error": "Form not found or expired."}, status_code=404)


app = FastAPI(title="Productform", docs_url=None, redoc_url=None)


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "0.1.0",
        "environment": os.environ.get("ENV", "dev"),
        "forms_active": len(forms),
    }


@app.get("/", response_class=HTMLResponse)
async def index():
    return (STATIC_DIR / "index.html").read_text()


@app.get("/products/new", response_class=HTMLResponse)
async def add_product_page():
    return (STATIC_DIR / "add-product.html").read_text()


@app.get("/api/categories")
async def categories():
    return {"categories": CATEGORIES}


@app.post("/api/forms")
async def open_form():
    _clean_expired()
    if len(forms) >= MAX_FORMS:
        return JSONResponse(
            {"error": "Server is busy. Please try again in a few minutes."},
            status_code=503,
        )

    form_id = uuid.uuid4().hex[:12]
    session = FormSession()
    forms[form_id] = session
    log.info("form_opened", form_id=form_id)
    return {"form_id": form_id, "state": session.page.state.to_dict()}


@app.get("/api/forms/{form_id}")
async def form_state(form_id: str):
    session = _get_form(form_id)
    if not session:
        return _not_found()
    return {"form_id": form_id, "state": session.page.state.to_dict()}


@app.post("/api/forms/{form_id}/fields")
async def change_field(form_id: str, request: Request):
    # Request body size guard
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_BODY_BYTES:
        return JSONResponse({"error": "Request too large."}, status_code=413)

    session = _get_form(form_id)
    if not session:
        return _not_found()

    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Field event must be JSON."}, status_code=400)
    if not isinstance(body, dict):
        return JSONResponse({"error": "Expected a field event object."}, status_code=400)
    name = body.get("name", "")
    value = body.get("value", "")
    if not isinstance(name, str) or not isinstance(value, str):
        return JSONResponse({"error": "Field name and value must be text."}, status_code=400)
    checked = body.get("checked", False)
    if not isinstance(checked, bool):
        return JSONResponse({"error": "Field checked state must be true or false."}, status_code=400)

    try:
        update = parse_update(
            name,
            value,
            type=body.get("type", "text"),
            checked=checked,
        )
    except UnknownField as e:
        log.warning("unknown_field", form_id=form_id, field=name)
        return JSONResponse({"error": f"Invalid field event: {e}"}, status_code=400)

    state = session.page.change(update)
    return {"form_id": form_id, "state": state.to_dict()}


@app.post("/api/forms/{form_id}/submit")
async def submit_form(form_id: str):
    session = _get_form(form_id)
    if not session:
        return _not_found()

    if session.page.state.submitting:
        return JSONResponse(
            {"error": "A submission is already in progress."}, status_code=409
        )

    state = await session.page.submit()
    if session.redirect:
        # The page is left behind once navigated.
        forms.pop(form_id, None)
        log.info("form_closed", form_id=form_id, redirect=session.redirect)
    return {"form_id": form_id, "state": state.to_dict()}


def main():
    port = int(os.environ.get("PORT", "8000"))
    is_dev = os.environ.get("ENV", "dev") == "dev"
    uvicorn.run(
        "productform.web.app:app",
        host="0.0.0.0",
        port=port,
        reload=is_dev,
    )
