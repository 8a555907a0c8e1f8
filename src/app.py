"""Storefront FastAPI application.

Processes commands synchronously per request; every request runs inside the
storefront domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml:
#   - unset/"test" → sync event processing (receipt emails sent in-request)
#   - "production" → async event processing (run src/server.py alongside)
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from storefront import config
from storefront.domain import storefront  # noqa: E402
from storefront.utils.logging import add_context, clear_context

storefront.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="E-commerce storefront: catalog, carts, checkout, accounts and chat",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context for API requests."""
    if request.url.path.startswith("/api"):
        clear_context()
        add_context(method=request.method, path=request.url.path)
        try:
            with storefront.domain_context():
                return await call_next(request)
        finally:
            clear_context()
    # Health check, docs and static uploads need no domain context
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error envelopes
# ---------------------------------------------------------------------------
from storefront.api import register_exception_handlers, routers  # noqa: E402

for router in routers:
    app.include_router(router)

register_exception_handlers(app)

Path(config.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=config.UPLOAD_DIR), name="uploads")


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": storefront.name})
