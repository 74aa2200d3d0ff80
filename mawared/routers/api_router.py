from fastapi import APIRouter
from mawared.routers import leave, dashboard

# Centralized API router hub; main.py only imports this one.
api_router = APIRouter()

api_router.include_router(leave.router, tags=["Leave"])
api_router.include_router(dashboard.router, tags=["Dashboard"])
