"""
Kitchenbook Web API - FastAPI application.

Serves the recipe import and inventory endpoints for the web frontend.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kitchenbook import __version__
from kitchenbook.config import settings
from kitchenbook.web.inventory_routes import router as inventory_router
from kitchenbook.web.recipe_import_routes import router as recipe_import_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Kitchenbook", version=__version__)


@app.on_event("startup")
async def startup_event():
    """Log configuration on startup."""
    logger.info("Kitchenbook starting up...")
    logger.info(f"  Environment: {settings.kitchen_env}")
    logger.info(f"  Ingredient policy: {settings.ingredient_policy}")
    logger.info(f"  Supabase configured: {settings.has_supabase}")


# CORS middleware for the frontend dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",  # Vite dev server
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(recipe_import_router, prefix="/api")
app.include_router(inventory_router, prefix="/api")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}
