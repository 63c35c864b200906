"""Health check endpoint"""
import time

from fastapi import APIRouter

from app.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check():
    """Basic health check endpoint"""
    return {
        "success": True,
        "message": "Dream analysis API is healthy",
        "timestamp": int(time.time() * 1000),
        "version": get_settings().api_version,
    }
