"""Health check routes"""

from fastapi import APIRouter
import logging

from adapters import mongo_adapter
from app.config import settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("nutriplan.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name}


@router.get("/health-check/catalog")
def catalog_status():
    """Report whether the recipe catalog answers."""
    return {"catalog": "ok" if mongo_adapter.ping() else "unavailable"}
