from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordRequestForm
import logging

from app.core.auth import authenticate, get_current_user
from app.core.jwt import create_access_token
from app.core.rate_limiter import limiter
from app.schemas.user import SessionUser, TokenResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = logging.getLogger("app.auth")


# ---------------- LOGIN (TOKEN-BASED) ----------------
@router.post("/login", response_model=TokenResponse)
@limiter.limit("5/minute")
def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
):
    user = authenticate(form_data.username, form_data.password)

    if not user:
        logger.warning(f"Failed login for {form_data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    token = create_access_token(data={"sub": user.email})

    return {
        "access_token": token,
        "token_type": "bearer",
        "role": user.role,
    }


# ---------------- CURRENT SESSION ----------------
@router.get("/me", response_model=SessionUser)
def me(current_user: SessionUser = Depends(get_current_user)):
    return current_user


# ---------------- LOGOUT ----------------
@router.post("/logout")
def logout():
    return {"message": "Logged out successfully"}
