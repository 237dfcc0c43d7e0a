"""API router: aggregates all endpoints."""

from fastapi import APIRouter

from polai.api import analyze, health, root

api_router = APIRouter()

api_router.include_router(root.router)
api_router.include_router(health.router)
api_router.include_router(analyze.router)
