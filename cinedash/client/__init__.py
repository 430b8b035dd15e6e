"""
Dashboard Client Module
"""
from .provider import TABLE_ENDPOINTS, DataProviderClient
from .session import DashboardSession

__all__ = [
    "TABLE_ENDPOINTS",
    "DataProviderClient",
    "DashboardSession",
]
