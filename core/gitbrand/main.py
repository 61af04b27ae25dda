"""GitBrand - FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gitbrand import __version__
from gitbrand.api.routes import chat, repos, settings
from gitbrand.api.schemas import HealthResponse
from gitbrand.config import API_PREFIX, HOST, PORT
from gitbrand.utils.logging import logger

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info(f"GitBrand v{__version__} starting...")
    logger.info(f"Server running at http://{HOST}:{PORT}")
    yield
    logger.info("GitBrand stopped")


app = FastAPI(
    title="GitBrand",
    description="Manage a public GitHub profile with a confirm-before-act assistant",
    version=__version__,
    lifespan=lifespan,
)

# Configure CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(chat.router, prefix=API_PREFIX)
app.include_router(repos.router, prefix=API_PREFIX)
app.include_router(settings.router, prefix=API_PREFIX)


@app.get(f"{API_PREFIX}/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    run()
