"""
User endpoints.

``POST /api/exercise/new-user`` registers a username and
``GET /api/exercise/users`` lists every registered user.  A username
that is already taken is answered with 400 ``username already taken``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from exercise_tracker_api.app.api.deps import get_user_service, parse_payload, read_payload
from exercise_tracker_api.app.schemas.user import UserCreate, UserRead
from exercise_tracker_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/new-user", response_model=UserRead)
async def create_user(
    payload: Dict[str, Any] = Depends(read_payload),
    users: UserService = Depends(get_user_service),
) -> UserRead:
    """Create a user from the ``username`` field and return it with its id."""
    data = parse_payload(UserCreate, payload)
    return await users.create_user(data)


@router.get("/users", response_model=List[UserRead])
async def list_users(users: UserService = Depends(get_user_service)) -> List[UserRead]:
    """Return all users in the order they were created."""
    return await users.list_users()
