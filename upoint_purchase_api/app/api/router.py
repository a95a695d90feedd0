"""
Top‑level API router.

All routes live under ``/auth``: the public signup/login pair and the
bearer‑protected account, catalog and purchase routes.  When new
endpoint modules are added, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import auth, items, purchases

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(items.router, prefix="/auth", tags=["items"])
router.include_router(purchases.router, prefix="/auth", tags=["purchases"])
