"""
Top-level API router that aggregates all sub-routers.
"""

from fastapi import APIRouter

from blowerdoor.api.blower_door import router as blower_door_router

router = APIRouter()
router.include_router(blower_door_router)
