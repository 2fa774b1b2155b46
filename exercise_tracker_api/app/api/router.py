"""
Top‑level router of the API.

User and exercise routes share the ``/exercise`` prefix; ``create_app``
mounts this router under ``/api`` so the public paths read
``/api/exercise/...``.
"""

from fastapi import APIRouter

from .endpoints import exercises, users

router = APIRouter()

router.include_router(users.router, prefix="/exercise", tags=["users"])
router.include_router(exercises.router, prefix="/exercise", tags=["exercises"])
