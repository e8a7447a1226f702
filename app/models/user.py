from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

from app.models.base import MongoRecord

class UserInDB(MongoRecord):
    """User record as synced from the identity provider."""
    name: str = "Anonymous"
    email: Optional[str] = None
    image_url: Optional[str] = None
    token_identifier: Optional[str] = None

class UserResponse(BaseModel):
    """User response schema."""
    id: str
    name: str
    email: Optional[str] = None
    image_url: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

    @classmethod
    def from_db(cls, user: UserInDB) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            image_url=user.image_url
        )
