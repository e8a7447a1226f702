from fastapi import APIRouter, Depends

from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.models.user import UserInDB
from app.schemas.contact import ContactsResponse
from app.services.contact_service import ContactService

router = APIRouter()


@router.get("", response_model=ContactsResponse)
async def get_all_contacts(
    current_user: UserInDB = Depends(get_current_user),
    db = Depends(get_db)
):
    """People you split 1-to-1 expenses with, and your groups"""
    return await ContactService(db).get_contacts(current_user.id)
