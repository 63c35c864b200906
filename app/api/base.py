from fastapi import APIRouter
from app.api import dreams, health, lifeclock, timer

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(dreams.router)
api_router.include_router(health.router)
api_router.include_router(timer.router)
api_router.include_router(lifeclock.router)
