"""
Static game data loading.
"""

from higher_engine.resources.database import Database, CATEGORIES

__all__ = [
    "Database",
    "CATEGORIES",
]
