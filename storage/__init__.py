from .json_store import JsonArrayStore
from .events import EventStore
from .users import UserStore

__all__ = ["JsonArrayStore", "EventStore", "UserStore"]
