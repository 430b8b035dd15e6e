"""
API Routes Module
"""
from .health import router as health_router
from .warehouse import router as warehouse_router
from .dashboard import router as dashboard_router

__all__ = [
    "health_router",
    "warehouse_router",
    "dashboard_router",
]
