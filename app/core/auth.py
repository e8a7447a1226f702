from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from app.core.config import settings
from app.db.mongo import get_db
from app.repositories.user_repo import UserRepository
from app.models.user import UserInDB

security = HTTPBearer(auto_error=False)


class Unauthenticated(Exception):
    """No valid subject identity is available for this request."""

    def __init__(self, detail: str = "Not authenticated"):
        super().__init__(detail)
        self.detail = detail


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Create JWT access token."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)

    now = datetime.now(timezone.utc)
    expire = now + expires_delta

    payload = {
        "sub": user_id,
        "exp": int(expire.timestamp()),
        "iat": int(now.timestamp())
    }

    encoded_jwt = jwt.encode(
        payload,
        settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM
    )
    return encoded_jwt


async def resolve_subject(token: str | None, user_repo: UserRepository) -> UserInDB:
    """
    Turn a bearer token into the stored user it belongs to.

    Raises Unauthenticated for a missing, invalid or expired token, or when
    the user behind it no longer exists.
    """
    if not token:
        raise Unauthenticated()

    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise Unauthenticated("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise Unauthenticated("Invalid token")

    user = await user_repo.get_user_by_id(user_id)
    if user is None:
        raise Unauthenticated("User not found")

    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db = Depends(get_db)
) -> UserInDB:
    """Get current user from JWT token."""
    token = credentials.credentials if credentials else None

    try:
        return await resolve_subject(token, UserRepository(db))
    except Unauthenticated as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.detail,
            headers={"WWW-Authenticate": "Bearer"}
        )
