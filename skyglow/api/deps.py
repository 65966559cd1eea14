# File: skyglow/api/deps.py

from fastapi import Request

from skyglow.core.config import Settings
from skyglow.services.context import SkyContext


def get_sky_context(request: Request) -> SkyContext:
    """
    FastAPI dependency that provides the shared, read-only sampling state.

    Usage in route functions:
        context: SkyContext = Depends(get_sky_context)
    """
    return request.app.state.sky_context


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
