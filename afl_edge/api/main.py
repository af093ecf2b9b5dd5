"""
AFL Edge Prediction Engine - FastAPI Application

Main entry point for the API.
This module configures logging, the FastAPI app, error handling and routes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from afl_edge import __version__, config
from afl_edge.api.routes import players, predictions
from afl_edge.application.dtos.dtos import ErrorResponseDTO, HealthResponseDTO
from afl_edge.utils.time_utils import get_current_time


# Log timestamps in the application timezone
class AppTimeFormatter(logging.Formatter):
    def formatTime(self, record, datefmt=None):
        ct = get_current_time()
        if datefmt:
            s = ct.strftime(datefmt)
        else:
            t = ct.strftime("%Y-%m-%d %H:%M:%S")
            s = "%s,%03d" % (t, record.msecs)
        return s

formatter = AppTimeFormatter(config.LOG_FORMAT)
handler = logging.StreamHandler()
handler.setFormatter(formatter)
root_logger = logging.getLogger()
root_logger.setLevel(config.LOG_LEVEL)
root_logger.handlers = [handler]
logger = logging.getLogger(__name__)


# Application metadata
APP_TITLE = "AFL Edge Prediction Engine"
APP_DESCRIPTION = """
**AFL Match Prediction API**

Weighted multi-factor forecasts for AFL fixtures and player props.

## Match predictions

* Recent form, head to head, scoring margin, venue record, clearances and interstate travel
* Win probability for each side (always summing to 100%)
* Predicted score line and margin
* Confidence tier and full factor breakdown

## Player props

* Recency-weighted projections for disposals, goals, tackles and marks
* Opponent defensive adjustment
* Variability-based confidence and trend

---
**Educational purposes only** - Not for actual betting
"""
APP_VERSION = __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"Starting {APP_TITLE} v{APP_VERSION}")
    logger.info(
        f"Form window {config.TEAM_FORM_WINDOW} games, player history {config.PLAYER_HISTORY_WINDOW} games, "
        f"{config.MAX_WORKERS} round workers"
    )
    yield
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=APP_TITLE,
    description=APP_DESCRIPTION,
    version=APP_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# Exception handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(f"Unhandled error: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=ErrorResponseDTO(
            error="internal_server_error",
            message="An unexpected error occurred",
            details={"path": str(request.url)},
        ).model_dump(),
    )


# Health check endpoint
@app.get(
    "/health",
    response_model=HealthResponseDTO,
    tags=["Health"],
    summary="Health check",
    description="Check if the API is running and healthy.",
)
async def health_check() -> HealthResponseDTO:
    """Health check endpoint."""
    return HealthResponseDTO(
        status="healthy",
        version=APP_VERSION,
        timestamp=get_current_time(),
    )


# Root endpoint
@app.get(
    "/",
    tags=["Root"],
    summary="API Information",
    description="Get basic API information and links.",
)
async def root():
    """Root endpoint with API info."""
    return {
        "name": APP_TITLE,
        "version": APP_VERSION,
        "documentation": "/docs",
        "health": "/health",
        "endpoints": {
            "match": "/api/v1/predictions/match",
            "games": "/api/v1/predictions/games",
            "round": "/api/v1/predictions/round",
            "playerProps": "/api/v1/players/props",
        },
    }


# Include routers
app.include_router(predictions.router, prefix="/api/v1")
app.include_router(players.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "afl_edge.api.main:app",
        host="0.0.0.0",
        port=config.PORT,
        reload=True,
    )
