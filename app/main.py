# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.exceptions import CartConsistencyViolation, ProviderError
from app.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from app.models import cart as _cart_models  # noqa: F401

# Routers
from app.routers.products import router as products_router
from app.routers.cart import router as cart_router
from app.services.catalog_cache import get_catalog_cache

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create cart tables.
      - Warm the catalog cache (optional). A provider failure here is
        logged only; the first request retries the fetch.
    """
    logger.info("🔄 Startup: Connecting to cart database...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise

    if settings.CATALOG_WARM_ON_STARTUP:
        try:
            products = get_catalog_cache().get()
            logger.info(f"✅ Startup: catalog warmed with {len(products)} products.")
        except ProviderError as e:
            logger.warning(f"⚠️ Startup: catalog warm-up failed: {e}")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "Ignite Shop API",
    version="0.1.0",
    lifespan=lifespan,
)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Domain error mapping ---
@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError):
    logger.error(f"Commerce provider error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": "Catalog is unavailable"},
    )


@app.exception_handler(CartConsistencyViolation)
async def cart_conflict_handler(request: Request, exc: CartConsistencyViolation):
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": "Product already in cart", "product_id": exc.product_id},
    )


# Versioned API prefix, e.g. /api/v1
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(cart_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "ignite-shop-backend"}
