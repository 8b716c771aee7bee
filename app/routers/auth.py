# app/routers/auth.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from app.config import settings
from app.core.auth import create_session_token, get_current_user
from app.database import get_storage
from app.schemas.user import User, UserUpsert
from app.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


@router.get("/login")
async def login(storage: Storage = Depends(get_storage)):
    # Single fixed demo account; no credentials involved
    user = await storage.upsert_user(
        UserUpsert(
            id=settings.DEMO_USER_ID,
            email=settings.DEMO_USER_EMAIL,
            first_name="Demo",
            last_name="User",
        )
    )
    logger.info("Demo login for %s", user.id)

    response = RedirectResponse(url="/", status_code=302)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(user.id),
        max_age=settings.SESSION_EXPIRE_DAYS * 24 * 3600,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/logout")
async def logout():
    response = RedirectResponse(url="/", status_code=302)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/auth/user", response_model=User)
async def read_current_user(current_user: User = Depends(get_current_user)):
    return current_user
