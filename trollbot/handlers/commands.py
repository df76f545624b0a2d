from __future__ import annotations

import logging

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import ContextTypes

from trollbot.handlers.messages_common import _is_owner_user, _runtime, _send_to_chat

logger = logging.getLogger("bot")

PANEL_DENIED = "Nice try, but only my boss can use this."


def build_panel_markup() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [
            [
                InlineKeyboardButton(text="Pause", callback_data="pause"),
                InlineKeyboardButton(text="Resume", callback_data="resume"),
            ],
            [InlineKeyboardButton(text="Groups", callback_data="groups")],
            [InlineKeyboardButton(text="Shutdown", callback_data="shutdown")],
        ]
    )


async def handle_panel(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message or not update.effective_chat:
        return
    runtime = _runtime(context)
    if update.effective_chat.type != "private" or not _is_owner_user(update.effective_user, runtime):
        await update.message.reply_text(PANEL_DENIED)
        return
    await update.message.reply_text("Control Panel:", reply_markup=build_panel_markup())


async def handle_broadcast(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if not update.message or not update.effective_user:
        return
    runtime = _runtime(context)
    if not _is_owner_user(update.effective_user, runtime):
        await update.message.reply_text(PANEL_DENIED)
        return
    text = " ".join(context.args or []).strip()
    if not text:
        await update.message.reply_text("Usage: /broadcast <text>")
        return
    groups = await runtime.state.groups()
    if not groups:
        await update.message.reply_text("No groups found.")
        return
    sent = 0
    for chat_id in groups:
        if await _send_to_chat(context.bot, chat_id, text):
            sent += 1
    logger.info("broadcast sent=%s total=%s", sent, len(groups))
    await update.message.reply_text(f"Broadcast sent to {sent}/{len(groups)} groups.")
