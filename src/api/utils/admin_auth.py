"""
Admin API Key Authentication

Guards the dashboard endpoints (applications, events, export).
Webhooks authenticate with their own signatures instead.
"""

from fastapi import Header, status

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError


async def verify_admin_api_key(x_admin_api_key: str = Header(None)):
    """
    Verify admin API key from X-Admin-API-Key header.

    Skipped entirely when AUTH_DISABLED is set (local development).

    Raises:
        ClientError: 401 if key is missing or invalid

    Returns:
        True if valid
    """
    if ApplicationConfig.AUTH_DISABLED:
        return True

    if not x_admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if x_admin_api_key != ApplicationConfig.ADMIN_API_KEY:
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return True
