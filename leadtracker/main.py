"""
Lead Tracker - FastAPI Application
Main entry point with all routes configured.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from leadtracker.api import leads, views
from leadtracker.config import settings
from leadtracker.database import init_db
from leadtracker.schemas.common import HealthResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    init_db()
    yield
    # Shutdown


app = FastAPI(
    title="Lead Tracker API",
    description="Lead import, follow-up tracking and filtered views",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(leads.router)
app.include_router(views.router)


@app.get("/")
async def root():
    return {
        "message": "Lead Tracker API is running",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Detailed health check."""
    return HealthResponse()
