"""CafeHub FastAPI application.

Web server that processes commands synchronously via HTTP. Every request
under a CafeHub route runs inside the cafehub domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - default / "test" → event_processing = "sync"  (summary refreshed in-request)
#   - "production"     → event_processing = "async" (summary refreshed via Engine)
from cafehub.domain import cafehub  # noqa: E402
from cafehub.utils.logging import add_context, clear_context
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

cafehub.init()

_DOMAIN_PREFIXES = ("/cafes", "/ratings")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="CafeHub API",
    description="Cafe listings, ratings and reviews",
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
    """Push the cafehub domain context for domain routes, and tag their log lines."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        clear_context()
        add_context(
            user_id=request.headers.get("x-user-id"),
            method=request.method,
            path=request.url.path,
        )
        try:
            with cafehub.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers and error mapping
# ---------------------------------------------------------------------------
from cafehub.api import cafe_router, rating_router  # noqa: E402
from cafehub.api.errors import register_exception_handlers  # noqa: E402

app.include_router(cafe_router)
app.include_router(rating_router)
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": cafehub.name})
