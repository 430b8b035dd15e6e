"""
API Module
"""
from .main import create_api_app
from .middleware import WarehouseRequestMiddleware, resource_for_path

__all__ = [
    "create_api_app",
    "WarehouseRequestMiddleware",
    "resource_for_path",
]
