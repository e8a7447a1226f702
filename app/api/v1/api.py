from fastapi import APIRouter
from app.api.v1.endpoints import users, dashboard, contacts

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
