"""
CineDash - Movie Ticket Sales Analytics
"""

__version__ = "1.0.0"
