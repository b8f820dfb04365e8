"""FastAPI application for the train ticket estimator."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ticket_estimator.api.endpoints import router
from ticket_estimator.config import settings
from ticket_estimator.logging_setup import setup_logging

setup_logging(settings.LOG_LEVEL, json_output=settings.LOG_JSON)

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    """Service banner."""
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
    }
