"""Identity store: registered users keyed by email."""

import asyncio
from typing import Any

from errors import ConflictError
from storage.json_store import JsonArrayStore


class UserStore(JsonArrayStore):
    def __init__(self, path: str, log_level: str = "INFO", json_logs: bool = True):
        super().__init__(path, component="user-store", log_level=log_level, json_logs=json_logs)

    async def find(self, email: str) -> dict[str, Any] | None:
        for user in await self.load_all():
            if user.get("email") == email:
                return user
        return None

    async def add(self, user: dict[str, Any]):
        """Insert a user, enforcing email uniqueness inside the write lock."""
        async with self._lock:
            users = await asyncio.to_thread(self._load)
            if any(u.get("email") == user["email"] for u in users):
                raise ConflictError("User already exists")
            users.append(user)
            await asyncio.to_thread(self._write_file, users)
