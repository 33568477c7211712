"""
API dependencies for dependency injection
"""

from typing import Optional
from fastapi import Depends, Header

from adapters import AuthUser, SupabaseAdapter, get_supabase_adapter


def bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header, if any."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(
    token: Optional[str] = Depends(bearer_token),
    supabase: SupabaseAdapter = Depends(get_supabase_adapter),
) -> AuthUser:
    """
    Authenticated caller; 401 when the token is missing or rejected.

    Usage:
        @router.get("/example")
        def example(user: AuthUser = Depends(get_current_user)):
            ...
    """
    return supabase.get_user(token)
