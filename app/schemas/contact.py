from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class ContactUser(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    image_url: Optional[str] = None
    type: Literal["user"] = "user"


class ContactGroup(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    member_count: int
    type: Literal["group"] = "group"


class ContactsResponse(BaseModel):
    """People and groups the current user shares money with."""
    users: List[ContactUser] = Field(default_factory=list)
    groups: List[ContactGroup] = Field(default_factory=list)
