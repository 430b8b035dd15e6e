"""
Data Ingestion Module
"""
from .seed_db import execute_batch_insert, frame_records, seed

__all__ = [
    "execute_batch_insert",
    "frame_records",
    "seed",
]
