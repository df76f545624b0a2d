from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass

HISTORY_LIMIT = 10
CONTEXT_CHAR_LIMIT = 1000


@dataclass(frozen=True)
class MemoryLine:
    chat_id: int | None
    text: str


class MemoryStore:
    """Recent message lines per user.

    Each user keeps at most ``history_limit`` lines (oldest evicted first).
    The set of users is bounded too: once ``max_users`` is exceeded the user
    written least recently is dropped.
    """

    def __init__(
        self,
        history_limit: int = HISTORY_LIMIT,
        max_users: int = 1000,
        context_limit: int = CONTEXT_CHAR_LIMIT,
    ) -> None:
        self._history_limit = history_limit
        self._max_users = max_users
        self._context_limit = context_limit
        self._users: OrderedDict[int, list[MemoryLine]] = OrderedDict()
        self._logger = logging.getLogger("memory")

    def record(self, user_id: int, line: str, chat_id: int | None = None) -> None:
        lines = self._users.get(user_id)
        if lines is None:
            lines = []
            self._users[user_id] = lines
        else:
            self._users.move_to_end(user_id)
        lines.append(MemoryLine(chat_id=chat_id, text=line))
        if len(lines) > self._history_limit:
            del lines[: len(lines) - self._history_limit]
        while len(self._users) > self._max_users:
            evicted, _ = self._users.popitem(last=False)
            self._logger.debug("memory evicted user_id=%s", evicted)

    def history(self, user_id: int) -> list[str]:
        return [item.text for item in self._users.get(user_id, [])]

    def build_context(self, chat_id: int | None = None) -> str:
        collected: list[str] = []
        for lines in self._users.values():
            for item in lines:
                if chat_id is not None and item.chat_id != chat_id:
                    continue
                collected.append(item.text)
        joined = "\n".join(collected)
        if len(joined) > self._context_limit:
            return joined[-self._context_limit :]
        return joined

    def clear(self) -> None:
        self._users.clear()

    def __len__(self) -> int:
        return len(self._users)
