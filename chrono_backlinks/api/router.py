"""Aggregate all API sub-routers."""

from fastapi import APIRouter

from . import sort, system, ws

api_router = APIRouter()

api_router.include_router(sort.router)
api_router.include_router(system.router)
api_router.include_router(ws.router)
