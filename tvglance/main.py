import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from tvglance.api.routes_api import router as api_router
from tvglance.api.routes_ui import router as ui_router
from tvglance.core.config import get_settings
from tvglance.core.deps import client

load_dotenv()

# Paths
BASE_DIR = Path(__file__).resolve().parent
STATIC_DIR = BASE_DIR / "static"

logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def app_lifespan(app: FastAPI):
    """Application lifespan context manager."""
    try:
        yield
    finally:
        # Teardown the upstream HTTP session
        logger = logging.getLogger(__name__)
        try:
            await client.aclose()
        except Exception as e:
            logger.error(f"Error closing TVMaze client: {e}")


# Initialize FastAPI with overarching lifespan
app = FastAPI(
    title="TVGlance",
    description="Browse TVMaze shows and episodes",
    version="0.1.0",
    lifespan=app_lifespan,
)

# Mount static files
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

# Include routers
app.include_router(ui_router)
app.include_router(api_router, prefix="/api")
