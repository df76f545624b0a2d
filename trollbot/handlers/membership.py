from __future__ import annotations

import logging

from telegram import Update
from telegram.ext import ContextTypes

from trollbot.handlers.messages_common import _runtime

logger = logging.getLogger("bot")


async def handle_bot_membership(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.my_chat_member or not update.effective_chat:
        return
    chat = update.effective_chat
    if chat.type == "private":
        return
    runtime = _runtime(context)
    new_status = update.my_chat_member.new_chat_member.status
    if new_status in ("member", "administrator"):
        logger.info("bot joined chat_id=%s title=%r", chat.id, chat.title)
        await runtime.state.track_group(chat.id, chat.title)
    elif new_status in ("left", "kicked"):
        logger.info("bot removed chat_id=%s status=%s", chat.id, new_status)
        await runtime.state.forget_group(chat.id)
