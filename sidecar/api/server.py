"""
TimeJoy Backend - FastAPI Server

This server runs as a sidecar next to the TimeJoy frontend and provides
API endpoints for logging time and reading dashboard data.
"""

import argparse
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from timejoy import __version__
from timejoy.core.runtime import HOME_ENV, STATE_FILENAME
from timejoy.utils.file_watcher import StateFileWatcher

from . import view_cache
from .dependencies import get_store
from .routes import backup, catalog, dashboard, entries, reflection, session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Watch the state document so edits from other processes reach the cache."""
    store = get_store()
    watcher = StateFileWatcher(store.state_file, on_change=lambda path: view_cache.invalidate())
    watcher.start()
    logger.info("Watching %s", store.state_file)
    yield
    watcher.stop()


app = FastAPI(
    title="TimeJoy Backend",
    description="Python backend sidecar for the TimeJoy time tracker",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session.router, prefix="/api/session", tags=["session"])
app.include_router(entries.router, prefix="/api/entries", tags=["entries"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(catalog.router, prefix="/api/catalog", tags=["catalog"])
app.include_router(backup.router, prefix="/api/backup", tags=["backup"])
app.include_router(reflection.router, prefix="/api/reflection", tags=["reflection"])


@app.get("/health")
def health():
    """Health check endpoint"""
    return {"status": "ok"}


@app.get("/")
def root():
    """Root endpoint with API info"""
    return {
        "name": "TimeJoy Backend",
        "version": __version__,
        "docs": "/docs",
    }


def main():
    """Main entry point for the sidecar"""
    parser = argparse.ArgumentParser(description="TimeJoy Backend Server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=9877, help="Port to listen on (default: 9877)")
    parser.add_argument("--home", help=f"Directory for {STATE_FILENAME} (overrides ${HOME_ENV})")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Log level (default: info)",
    )
    args = parser.parse_args()

    if args.home:
        os.environ[HOME_ENV] = args.home

    print(f"Starting TimeJoy backend on {args.host}:{args.port}")

    log_config = uvicorn.config.LOGGING_CONFIG
    for formatter in log_config["formatters"].values():
        formatter["datefmt"] = "%H:%M:%S"
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s %(levelprefix)s %(name)s: %(message)s"
    log_config["formatters"]["access"]["fmt"] = "%(asctime)s %(levelprefix)s \"%(request_line)s\" %(status_code)s"
    log_config["loggers"]["timejoy"] = {"handlers": ["default"], "level": args.log_level.upper()}
    log_config["loggers"]["sidecar"] = {"handlers": ["default"], "level": args.log_level.upper()}

    # Single worker: write_lock is per process.
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level, log_config=log_config)


if __name__ == "__main__":
    main()
