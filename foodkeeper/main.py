"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from foodkeeper.api import classify, family, history, inventory, recipes, shopping, websocket
from foodkeeper.config import get_settings
from foodkeeper.database import init_db

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup and stop any running recipe request on shutdown."""
    init_db()
    logger.info(f"FoodKeeper started ({settings.environment}, provider {settings.llm_provider})")
    yield
    recipes.shutdown_assistant()


app = FastAPI(
    title="FoodKeeper API",
    description="Self-hosted food inventory with expiry tracking and AI recipe suggestions",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(inventory.router)
app.include_router(family.router)
app.include_router(shopping.router)
app.include_router(history.router)
app.include_router(classify.router)
app.include_router(recipes.router)
app.include_router(websocket.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
