"""Service-layer utilities."""

from .welds import (
    WeldNotFoundError,
    create_weld,
    delete_weld,
    get_weld,
    list_welds,
    update_weld,
)
from .welds_client import ApiError, WeldsApiClient

__all__ = [
    "ApiError",
    "WeldNotFoundError",
    "WeldsApiClient",
    "create_weld",
    "delete_weld",
    "get_weld",
    "list_welds",
    "update_weld",
]
