import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from search_portal.database import get_db
from search_portal.dependencies import get_current_user
from search_portal.schemas.auth import UserLogin, Token, UserResponse, PasswordChange
from search_portal.core.security import verify_password, create_access_token, hash_password
from search_portal.repos.user_repo import get_by_username, update as update_user
from search_portal.models.user import User

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        role=user.role,
        is_admin=user.role == "admin",
    )


@router.post("/login", response_model=Token)
def login(data: UserLogin, db: Session = Depends(get_db)):
    try:
        user = get_by_username(db, data.username)
        if not user or not verify_password(data.password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username or password",
            )
        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is disabled",
            )
        logger.info("User logged in: %s", user.username)
        token = create_access_token(user.id, role=user.role)
        return Token(access_token=token, user=_user_to_response(user))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for username=%s: %s", data.username, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed") from e


@router.get("/me", response_model=UserResponse)
def get_me(user: User = Depends(get_current_user)):
    return _user_to_response(user)


@router.patch("/me/password", response_model=UserResponse)
def change_password(
    data: PasswordChange,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        if not verify_password(data.current_password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Current password is incorrect",
            )
        updated = update_user(db, user.id, password_hash=hash_password(data.new_password))
        logger.info("Password changed: %s", user.username)
        return _user_to_response(updated or user)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Password change failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to change password") from e
