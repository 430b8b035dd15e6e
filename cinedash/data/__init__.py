"""
Data Generation Module
"""
from .generators import (
    DataGenerator,
    CustomerGenerator,
    MovieGenerator,
    TheaterGenerator,
    DateGenerator,
    FactGenerator,
)

__all__ = [
    "DataGenerator",
    "CustomerGenerator",
    "MovieGenerator",
    "TheaterGenerator",
    "DateGenerator",
    "FactGenerator",
]
