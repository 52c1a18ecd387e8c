import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from . import __version__
from .adapters.repository import UnifiedRepositoryClient
from .routes import generic_files, scheduling
from .services.environment import get_fully_qualified_url
from .services.file_provider import RepositoryFileProvider


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logging.basicConfig(
    level=LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("repo_bridge.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the repository file provider on startup."""
    if getattr(app.state, "file_provider", None) is None:
        app.state.file_provider = RepositoryFileProvider(UnifiedRepositoryClient())
    log.info("Repository bridge started against %s", get_fully_qualified_url())
    yield


app = FastAPI(title="Repository Bridge", version=__version__, lifespan=lifespan)

# Include routers
app.include_router(generic_files.router)  # File browser tree and folders
app.include_router(scheduling.router)  # Run in background, output location


@app.get("/api/health")
def health():
    """Minimal liveness endpoint."""
    return {"status": "ok"}
