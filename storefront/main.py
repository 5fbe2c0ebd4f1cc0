from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI
from sqlmodel import Session

from storefront.core.config import get_settings
from storefront.core.state import get_checkout_wizard
from storefront.core.storage import SqlKeyValueStorage
from storefront.database import create_db_and_tables, engine
from storefront.repositories.product_repo import ProductRepository

# Routers
from storefront.routers.users import router as users_router
from storefront.routers.products import router as products_router
from storefront.routers.cart import router as cart_router
from storefront.routers.checkout import router as checkout_router
from storefront.routers.orders import router as orders_router
from storefront.routers.wishlist import router as wishlist_router
from storefront.routers.admin_stats import router as admin_stats_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create the key/value table.
      - Persist the seed catalog if no catalog is stored yet.

    Shutdown:
      - Let pending order confirmations finish.
    """
    logger.info("Startup: opening storage at %s", settings.STORAGE_URL)
    try:
        create_db_and_tables()
        with Session(engine) as session:
            if ProductRepository().seed_if_empty(SqlKeyValueStorage(session)):
                logger.info("Startup: seeded product catalog.")
    except Exception as e:
        logger.error(f"Startup: storage initialisation FAILED: {e}")
        raise
    yield
    await get_checkout_wizard().drain_notifications()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(users_router, prefix=settings.API_V1_STR)
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(cart_router, prefix=settings.API_V1_STR)
app.include_router(checkout_router, prefix=settings.API_V1_STR)
app.include_router(orders_router, prefix=settings.API_V1_STR)
app.include_router(wishlist_router, prefix=settings.API_V1_STR)
app.include_router(admin_stats_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "stylehive-storefront"}
