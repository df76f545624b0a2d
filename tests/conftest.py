from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.telegram_fakes import BOT_ID, BOT_USERNAME, OWNER
from trollbot.memory import MemoryStore
from trollbot.runtime import RuntimeContext
from trollbot.state import ProcessState


@pytest.fixture
def completion_client():
    client = MagicMock()
    client.complete = AsyncMock(return_value="lol ok")
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def runtime(completion_client):
    return RuntimeContext(
        bot_username=BOT_USERNAME,
        owner_username=OWNER,
        owner_user_id=1,
        owner_info="Boss is a backend dev from Lagos.",
        bot_name="trollgod",
        state=ProcessState(),
        memory=MemoryStore(),
        completion_client=completion_client,
    )


@pytest.fixture
def context(runtime):
    ctx = MagicMock()
    ctx.application.bot_data = runtime.to_bot_data()
    ctx.bot = MagicMock()
    ctx.bot.id = BOT_ID
    ctx.bot.send_message = AsyncMock()
    ctx.bot.leave_chat = AsyncMock()
    ctx.args = []
    return ctx
