# app/core/auth.py
import logging
from datetime import timedelta

from fastapi import Depends, Request
from jose import JWTError, jwt

from app.config import settings
from app.core.errors import Unauthenticated
from app.database import get_storage
from app.schemas.user import User
from app.storage.base import Storage
from app.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


def create_session_token(user_id: str) -> str:
    expire = utcnow() + timedelta(days=settings.SESSION_EXPIRE_DAYS)
    return jwt.encode(
        {"sub": user_id, "exp": expire},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def read_session_token(token: str) -> str:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise Unauthenticated()
    user_id = payload.get("sub")
    if not user_id:
        raise Unauthenticated()
    return user_id


async def get_current_user(
    request: Request,
    storage: Storage = Depends(get_storage),
) -> User:
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise Unauthenticated()

    user_id = read_session_token(token)
    user = await storage.get_user(user_id)
    if user is None:
        logger.warning("Session refers to unknown user %s", user_id)
        raise Unauthenticated()
    return user
