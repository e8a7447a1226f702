from fastapi import APIRouter, Depends
from app.models.user import UserInDB, UserResponse
from app.core.auth import get_current_user

router = APIRouter()

@router.get("/me", response_model=UserResponse)
async def get_my_profile(current_user: UserInDB = Depends(get_current_user)):
    """Get current user profile"""
    return UserResponse.from_db(current_user)
