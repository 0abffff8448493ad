"""
Bread Timer FastAPI application.

Main application entry point with route registration, CORS and table setup.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from breadtimer.config import settings
from breadtimer.api.routes import recipes, schedule, export, features
from breadtimer.db.database import SessionLocal, create_tables
from sqlalchemy import text

# Configure logging with configurable level
_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(
    level=_log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    create_tables()

    yield

    logger.info("Shutting down application...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Backward bread schedule calculator with calendar export",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(recipes.router)
app.include_router(schedule.router)
app.include_router(export.router)
app.include_router(features.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with database connectivity test."""
    db_status = "healthy"
    db_error = None

    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
    except Exception as e:
        db_status = "unhealthy"
        db_error = str(e)

    overall_status = "healthy" if db_status == "healthy" else "unhealthy"

    response = {
        "status": overall_status,
        "version": settings.app_version,
        "database": db_status,
    }

    if db_error:
        response["database_error"] = db_error

    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "breadtimer.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
