from __future__ import annotations

import logging

from telegram import Bot, User
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from trollbot.router import is_owner
from trollbot.runtime import RuntimeContext

logger = logging.getLogger("bot")


def _runtime(context: ContextTypes.DEFAULT_TYPE) -> RuntimeContext:
    return context.application.bot_data["runtime"]


def _is_owner_user(user: User | None, runtime: RuntimeContext) -> bool:
    if user is None:
        return False
    return is_owner(user.username, runtime.owner_username)


async def _send_to_chat(bot: Bot, chat_id: int, text: str) -> bool:
    try:
        await bot.send_message(chat_id=chat_id, text=text)
    except TelegramError:
        logger.exception("Manual send error chat_id=%s", chat_id)
        return False
    logger.info("Manual send success chat_id=%s", chat_id)
    return True
