"""
Raffa's Treats on Stix storefront

Menu browsing, session carts with stock-aware quantities, checkout handoff to
Messenger, and the admin order and inventory back-office.
"""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core import dependencies
from .core.config import settings
from .database.catalog import catalog_db
from .errors import BackendError, CatalogRowError
from .routes import admin_router, cart_router, checkout_router, menu_router

# Load environment variables
load_dotenv()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"{settings.app_name} starting up...")
    logger.info(f"Catalog source: {settings.catalog_source}")

    if settings.catalog_source == "backend":
        client = dependencies.get_backend_client()
        if client is None:
            logger.warning("Backend catalog requested but backend is not configured, serving seed menu")
        else:
            try:
                await catalog_db.refresh(client)
            except (BackendError, CatalogRowError) as e:
                logger.error(f"Initial catalog load failed, serving seed menu: {e}")

    yield

    logger.info(f"{settings.app_name} shutting down...")
    if dependencies.backend_client:
        await dependencies.backend_client.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Ordering and back-office API for Raffa's Treats on Stix",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(menu_router)
app.include_router(cart_router)
app.include_router(checkout_router)
app.include_router(admin_router)


@app.get("/")
async def home():
    """API index"""
    return {
        "message": f"{settings.app_name} API",
        "docs": "/docs",
        "endpoints": {
            "menu": "/api/menu",
            "cart": "/api/cart",
            "checkout": "/api/checkout",
            "admin": "/api/admin",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "raffas-store",
        "catalog_items": len(catalog_db.items),
        "backend_configured": settings.backend_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "raffas_store.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
