from __future__ import annotations

import asyncio
from dataclasses import dataclass


@dataclass(frozen=True)
class StateSnapshot:
    paused: bool = False
    shutting_down: bool = False


class ProcessState:
    """Admin flags and the tracked-group map, guarded by one lock."""

    def __init__(self) -> None:
        self._paused = False
        self._shutting_down = False
        self._groups: dict[int, str] = {}
        self._lock = asyncio.Lock()

    async def snapshot(self) -> StateSnapshot:
        async with self._lock:
            return StateSnapshot(
                paused=self._paused,
                shutting_down=self._shutting_down,
            )

    async def set_paused(self, paused: bool) -> None:
        async with self._lock:
            self._paused = paused

    async def toggle_shutdown(self) -> bool:
        async with self._lock:
            self._shutting_down = not self._shutting_down
            return self._shutting_down

    async def track_group(self, chat_id: int, title: str | None) -> None:
        async with self._lock:
            self._groups[chat_id] = title or str(chat_id)

    async def forget_group(self, chat_id: int) -> bool:
        async with self._lock:
            return self._groups.pop(chat_id, None) is not None

    async def groups(self) -> dict[int, str]:
        async with self._lock:
            return dict(self._groups)
