"""Storage adapters implementing UserDataRepository."""

from .json_file import JsonFileRepository
from .memory import MemoryRepository

__all__ = ["JsonFileRepository", "MemoryRepository"]
