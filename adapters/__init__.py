"""
Adapters package - External service connections.
HTTP clients for the generation API, Supabase auth/storage and remote image downloads.
"""

from adapters.gemini_adapter import GeminiAdapter, GeneratedImage, get_gemini_adapter
from adapters.supabase_adapter import AuthUser, SupabaseAdapter, get_supabase_adapter
from adapters.image_fetch_adapter import (
    ImageFetchAdapter,
    RemoteImage,
    get_image_fetch_adapter,
    is_blocked_host,
)

__all__ = [
    "GeminiAdapter",
    "GeneratedImage",
    "get_gemini_adapter",
    "AuthUser",
    "SupabaseAdapter",
    "get_supabase_adapter",
    "ImageFetchAdapter",
    "RemoteImage",
    "get_image_fetch_adapter",
    "is_blocked_host",
]
