"""Login/logout endpoints for the clinic-wide session."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from dental_center.deps import get_auth_session, get_current_user
from dental_center.models.user import User, UserProfile
from dental_center.services.auth import AuthSession

router = APIRouter()


class LoginRequest(BaseModel):
    """Credentials submitted by the login form."""

    email: str
    password: str


@router.post("/login", response_model=UserProfile)
def login(
    payload: LoginRequest,
    session: AuthSession = Depends(get_auth_session),
) -> UserProfile:
    """Start a session for the matching user."""

    if not session.login(payload.email, payload.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    return session.current_user.to_public()


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(session: AuthSession = Depends(get_auth_session)) -> None:
    session.logout()


@router.get("/me", response_model=UserProfile)
def me(user: User = Depends(get_current_user)) -> UserProfile:
    return user.to_public()
