# app/core/auth.py

import secrets

from fastapi import Depends, HTTPException, status

from app.core.config import settings
from app.core.jwt import decode_access_token
from app.core.oauth2 import oauth2_scheme
from app.schemas.user import SessionUser


def configured_accounts():
    """Enabled accounts as ``(email, password, role)``; both fields must be set."""
    accounts = [
        (settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD, "SUPERADMIN"),
        (settings.RECEPTION_EMAIL, settings.RECEPTION_PASSWORD, "RECEPTIONIST"),
    ]
    return [account for account in accounts if account[0] and account[1]]


def role_for(email: str):
    for account_email, _, role in configured_accounts():
        if account_email.lower() == email.lower():
            return role
    return None


def authenticate(email: str, password: str):
    matched = None

    for account_email, account_password, role in configured_accounts():
        email_ok = secrets.compare_digest(account_email.lower().encode(), email.lower().encode())
        password_ok = secrets.compare_digest(account_password.encode(), password.encode())

        if email_ok and password_ok:
            matched = SessionUser(email=account_email, role=role)

    return matched


def get_current_user(
    token: str = Depends(oauth2_scheme),
) -> SessionUser:
    payload = decode_access_token(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    email = payload.get("sub")

    if email is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )

    # Role always comes from server config, never from the token
    role = role_for(email)

    if role is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return SessionUser(email=email, role=role)

def get_admin_user(
    current_user: SessionUser = Depends(get_current_user),
):
    # Staff management is reserved for the salon owner
    if current_user.role != "SUPERADMIN":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user
