from .cache import TTLCache
from .db import Database, SessionMemory

__all__ = ["Database", "SessionMemory", "TTLCache"]
