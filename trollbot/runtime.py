from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from trollbot.llm_client import CompletionClient
from trollbot.memory import MemoryStore
from trollbot.router import RouterSettings
from trollbot.state import ProcessState


@dataclass
class RuntimeContext:
    bot_username: str
    owner_username: str
    owner_user_id: int
    owner_info: str
    bot_name: str
    state: ProcessState
    memory: MemoryStore
    completion_client: CompletionClient

    def router_settings(self) -> RouterSettings:
        return RouterSettings(
            owner_username=self.owner_username,
            bot_name=self.bot_name,
            bot_username=self.bot_username,
            owner_info=self.owner_info,
        )

    def to_bot_data(self) -> dict[str, Any]:
        return {"runtime": self}
