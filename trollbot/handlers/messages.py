from __future__ import annotations

import logging

from telegram import Message, Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from trollbot.filters import is_filtered
from trollbot.handlers.messages_common import _runtime
from trollbot.llm_client import CompletionError
from trollbot.router import IncomingMessage, RouteAction, RouteDecision, route_message
from trollbot.runtime import RuntimeContext

logger = logging.getLogger("bot")


def _replied_to_bot(message: Message, runtime: RuntimeContext, bot_id: int | None) -> bool:
    reply = message.reply_to_message
    if reply is None or reply.from_user is None:
        return False
    if bot_id is not None and reply.from_user.id == bot_id:
        return True
    username = reply.from_user.username
    return bool(username) and bool(runtime.bot_username) and username.lower() == runtime.bot_username.lower()


def to_incoming(update: Update, runtime: RuntimeContext, bot_id: int | None = None) -> IncomingMessage | None:
    message = update.message
    if not message or not message.text:
        return None
    if not update.effective_chat or not update.effective_user:
        return None
    chat = update.effective_chat
    user = update.effective_user
    return IncomingMessage(
        chat_id=chat.id,
        chat_type=chat.type,
        chat_title=chat.title,
        sender_id=user.id,
        sender_username=user.username,
        text=message.text,
        replied_to_bot=_replied_to_bot(message, runtime, bot_id),
    )


async def handle_text_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    runtime = _runtime(context)
    incoming = to_incoming(update, runtime, getattr(context.bot, "id", None))
    if incoming is None:
        return

    snapshot = await runtime.state.snapshot()
    chat_context = runtime.memory.build_context(incoming.chat_id) if incoming.is_group else ""
    decision = route_message(incoming, snapshot, runtime.router_settings(), context=chat_context)
    logger.info(
        "msg chat_id=%s type=%s user=%r action=%s persona=%s",
        incoming.chat_id,
        incoming.chat_type,
        incoming.sender_username,
        decision.action.value,
        decision.persona.value if decision.persona else None,
    )

    if decision.track_group:
        await runtime.state.track_group(incoming.chat_id, incoming.chat_title)
        sender = incoming.sender_username or str(incoming.sender_id)
        runtime.memory.record(incoming.sender_id, f"{sender}: {incoming.text}", chat_id=incoming.chat_id)

    await execute_decision(update, runtime, decision)


async def execute_decision(update: Update, runtime: RuntimeContext, decision: RouteDecision) -> None:
    if decision.action is RouteAction.IGNORE:
        return
    if decision.action is RouteAction.REPLY:
        await _send_reply(update, decision.text)
        return

    try:
        reply = await runtime.completion_client.complete(decision.system_prompt, decision.text)
    except CompletionError as exc:
        logger.warning(
            "completion failed persona=%s error=%s: %s",
            decision.persona.value if decision.persona else None,
            exc.__class__.__name__,
            exc,
        )
        return
    if is_filtered(reply):
        logger.info("response filtered: %r", reply)
        return
    await _send_reply(update, reply)


async def _send_reply(update: Update, text: str) -> None:
    try:
        await update.effective_chat.send_message(text)
    except TelegramError:
        logger.exception("reply send failed chat_id=%s", update.effective_chat.id)
