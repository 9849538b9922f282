"""Caller identity, as asserted by the upstream gateway."""

from fastapi import Header, HTTPException


def require_user(x_user_id: str = Header(default="")) -> str:
    """Raise 401 unless the request carries an ``X-User-Id`` header."""
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user_id
