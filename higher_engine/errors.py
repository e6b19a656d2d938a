"""
Engine-level exceptions.
"""


class EngineError(Exception):
    """Base class for engine errors."""


class DataNotFoundError(EngineError, KeyError):
    """Raised when a record id is not present in the database."""

    def __init__(self, category: str, record_id: str):
        self.category = category
        self.record_id = record_id
        super().__init__(f"Unknown {category} id: {record_id!r}")

    def __str__(self) -> str:
        return self.args[0]
