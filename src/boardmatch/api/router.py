"""Aggregate all API routers."""

from fastapi import APIRouter

from . import duplicates, signatures, system

api_router = APIRouter()
api_router.include_router(duplicates.router)
api_router.include_router(signatures.router)
api_router.include_router(system.router)
