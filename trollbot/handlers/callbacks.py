from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable

from telegram import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from trollbot.handlers.messages_common import _is_owner_user, _runtime, _send_to_chat
from trollbot.runtime import RuntimeContext

logger = logging.getLogger("bot")

CALLBACK_DENIED = "You wish 💀"
FAREWELL_TEXT = "Trollgod is out! Group too boring for my taste 💀"
MANUAL_MESSAGE_TEXT = "Manual test: Owner triggered this message!"


class AdminAction(str, Enum):
    PAUSE = "pause"
    RESUME = "resume"
    SHUTDOWN = "shutdown"
    GROUPS = "groups"
    NOOP = "noop"
    MESSAGE = "msg"
    LEAVE = "leave"


_TARGETED_ACTIONS = {AdminAction.NOOP, AdminAction.MESSAGE, AdminAction.LEAVE}


@dataclass(frozen=True)
class AdminCommand:
    action: AdminAction
    chat_id: int | None = None

    def to_callback_data(self) -> str:
        if self.action in _TARGETED_ACTIONS:
            return f"{self.action.value}_{self.chat_id}"
        return self.action.value


def parse_callback_data(data: str) -> AdminCommand | None:
    data = data.strip()
    for action in AdminAction:
        if action in _TARGETED_ACTIONS:
            prefix = f"{action.value}_"
            if not data.startswith(prefix):
                continue
            try:
                return AdminCommand(action, int(data[len(prefix):]))
            except ValueError:
                return None
        elif data == action.value:
            return AdminCommand(action)
    return None


def build_groups_markup(groups: dict[int, str]) -> InlineKeyboardMarkup:
    rows = [
        [
            InlineKeyboardButton(text=title, callback_data=AdminCommand(AdminAction.NOOP, chat_id).to_callback_data()),
            InlineKeyboardButton(text="Message", callback_data=AdminCommand(AdminAction.MESSAGE, chat_id).to_callback_data()),
            InlineKeyboardButton(text="Leave", callback_data=AdminCommand(AdminAction.LEAVE, chat_id).to_callback_data()),
        ]
        for chat_id, title in groups.items()
    ]
    return InlineKeyboardMarkup(rows)


def _reply_chat_id(query: CallbackQuery) -> int:
    if query.message is not None:
        return query.message.chat.id
    return query.from_user.id


async def _reply(query: CallbackQuery, context: ContextTypes.DEFAULT_TYPE, text: str, **kwargs: Any) -> None:
    chat_id = _reply_chat_id(query)
    try:
        await context.bot.send_message(chat_id=chat_id, text=text, **kwargs)
    except TelegramError:
        logger.exception("panel reply failed chat_id=%s", chat_id)


async def _on_pause(
    query: CallbackQuery,
    command: AdminCommand,
    context: ContextTypes.DEFAULT_TYPE,
    runtime: RuntimeContext,
) -> None:
    await runtime.state.set_paused(True)
    await _reply(query, context, "Bot paused in groups.")


async def _on_resume(
    query: CallbackQuery,
    command: AdminCommand,
    context: ContextTypes.DEFAULT_TYPE,
    runtime: RuntimeContext,
) -> None:
    await runtime.state.set_paused(False)
    await _reply(query, context, "Bot resumed in groups.")


async def _on_shutdown(
    query: CallbackQuery,
    command: AdminCommand,
    context: ContextTypes.DEFAULT_TYPE,
    runtime: RuntimeContext,
) -> None:
    if await runtime.state.toggle_shutdown():
        await _reply(query, context, "Bot shutting down. Bye 👋")
        return
    await _reply(query, context, "Bot is back online!")


async def _on_groups(
    query: CallbackQuery,
    command: AdminCommand,
    context: ContextTypes.DEFAULT_TYPE,
    runtime: RuntimeContext,
) -> None:
    groups = await runtime.state.groups()
    if not groups:
        await _reply(query, context, "No groups found.")
        return
    await _reply(query, context, "Groups:", reply_markup=build_groups_markup(groups))


async def _on_noop(
    query: CallbackQuery,
    command: AdminCommand,
    context: ContextTypes.DEFAULT_TYPE,
    runtime: RuntimeContext,
) -> None:
    return None


async def _on_message(
    query: CallbackQuery,
    command: AdminCommand,
    context: ContextTypes.DEFAULT_TYPE,
    runtime: RuntimeContext,
) -> None:
    logger.info("Owner %s triggered message for group %s", runtime.owner_username, command.chat_id)
    if await _send_to_chat(context.bot, command.chat_id, MANUAL_MESSAGE_TEXT):
        await _reply(query, context, "Message sent to group.")
        return
    await _reply(query, context, "Failed to send message.")


async def _on_leave(
    query: CallbackQuery,
    command: AdminCommand,
    context: ContextTypes.DEFAULT_TYPE,
    runtime: RuntimeContext,
) -> None:
    logger.info("Owner %s triggered leave for group %s", runtime.owner_username, command.chat_id)
    await _send_to_chat(context.bot, command.chat_id, FAREWELL_TEXT)
    try:
        await context.bot.leave_chat(chat_id=command.chat_id)
    except TelegramError:
        logger.exception("Manual leave error chat_id=%s", command.chat_id)
    else:
        logger.info("Manual leave success chat_id=%s", command.chat_id)
        await runtime.state.forget_group(command.chat_id)
    await _reply(query, context, "Left group.")


ActionHandler = Callable[[CallbackQuery, AdminCommand, ContextTypes.DEFAULT_TYPE, RuntimeContext], Awaitable[None]]

ACTION_HANDLERS: dict[AdminAction, ActionHandler] = {
    AdminAction.PAUSE: _on_pause,
    AdminAction.RESUME: _on_resume,
    AdminAction.SHUTDOWN: _on_shutdown,
    AdminAction.GROUPS: _on_groups,
    AdminAction.NOOP: _on_noop,
    AdminAction.MESSAGE: _on_message,
    AdminAction.LEAVE: _on_leave,
}


async def handle_callback(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    query = update.callback_query
    if not query or not query.from_user:
        return
    runtime = _runtime(context)
    data = query.data or ""
    logger.info("Callback received: %s from %s", data, query.from_user.username)
    await query.answer()

    if not _is_owner_user(query.from_user, runtime):
        await _reply(query, context, CALLBACK_DENIED)
        return

    command = parse_callback_data(data)
    if command is None:
        logger.warning("Unknown callback data %r", data)
        return
    await ACTION_HANDLERS[command.action](query, command, context, runtime)
