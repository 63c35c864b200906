# API module exports
from app.api import dreams, health, lifeclock, timer
from app.api.base import api_router

__all__ = ["dreams", "health", "lifeclock", "timer", "api_router"]
