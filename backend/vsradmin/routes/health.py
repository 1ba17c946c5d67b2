"""
VSRAdmin Backend - Liveness & Health Routes
============================================

What:  GET / and GET /health answer with a fixed plain-text string.
Who:   Load balancers, container health checks, and humans with a browser.

These checks only say "the process serves HTTP". Database reachability is
the collaborators' concern and is not checked here, so a database outage
cannot take the admin API out of rotation.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

ROOT_MESSAGE = "VSRAdmin API is running ✅"
HEALTH_MESSAGE = "Healthy ✅"

router = APIRouter(tags=["Health"])


@router.get("/", response_class=PlainTextResponse, summary="Liveness check")
async def root() -> str:
    return ROOT_MESSAGE


@router.get("/health", response_class=PlainTextResponse, summary="Health check")
async def health_check() -> str:
    return HEALTH_MESSAGE
