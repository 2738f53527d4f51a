from fastapi import APIRouter, Depends

from shortlinks.dependencies import get_current_user
from shortlinks.models.user import User
from shortlinks.schemas.link import UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def read_current_user(user: User = Depends(get_current_user)):
    """The caller's identity, short codes and notification inbox"""
    return UserResponse.model_validate(user)
