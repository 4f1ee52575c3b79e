# tds/main.py

from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from tds.config import settings, load_routes
from tds.routes import router
from tds.schemas import RouteConfig
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""

    # Startup
    logger.info("Starting TDS...")

    # Routes are loaded exactly once and never touched again
    if getattr(app.state, "routes", None) is None:
        app.state.routes = load_routes(settings.routes_file)
        logger.info(f"Loaded {len(app.state.routes.rules)} rules from {settings.routes_file}")
    else:
        logger.info(f"Using {len(app.state.routes.rules)} preloaded rules")

    logger.info(f"TDS ready - country from '{settings.country_header}' header")

    yield

    # Shutdown
    logger.info("Shutting down...")


def create_app(routes: Optional[RouteConfig] = None) -> FastAPI:
    app = FastAPI(
        title="TDS",
        description="Redirects matching visitors by country, device and bot status",
        version="1.0.0",
        lifespan=lifespan,
        # Every path belongs to the catch-all route
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.routes = routes

    # Register routes
    app.include_router(router)
    return app


app = create_app()
