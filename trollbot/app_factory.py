from __future__ import annotations

from telegram.ext import Application, ApplicationBuilder, CallbackQueryHandler, ChatMemberHandler, CommandHandler, MessageHandler, filters

from trollbot.config import AppConfig
from trollbot.handlers.callbacks import handle_callback as cb_handle_callback
from trollbot.handlers.commands import (
    handle_broadcast as cmd_handle_broadcast,
    handle_panel as cmd_handle_panel,
)
from trollbot.handlers.membership import handle_bot_membership as member_handle_bot_membership
from trollbot.handlers.messages import handle_text_message as msg_handle_text_message
from trollbot.llm_client import CompletionClient
from trollbot.memory import MemoryStore
from trollbot.runtime import RuntimeContext
from trollbot.state import ProcessState


def register_handlers(application: Application) -> None:
    application.add_handler(CommandHandler("panel", cmd_handle_panel))
    application.add_handler(CommandHandler("broadcast", cmd_handle_broadcast, filters=filters.ChatType.PRIVATE))
    application.add_handler(CallbackQueryHandler(cb_handle_callback))
    application.add_handler(ChatMemberHandler(member_handle_bot_membership, ChatMemberHandler.MY_CHAT_MEMBER))
    application.add_handler(MessageHandler(filters.TEXT & (~filters.COMMAND), msg_handle_text_message))


def build_application(
    config: AppConfig,
    runtime: RuntimeContext,
) -> Application:
    application = ApplicationBuilder().token(config.telegram_bot_token).concurrent_updates(True).build()
    application.bot_data.update(runtime.to_bot_data())
    register_handlers(application)
    return application


def build_runtime(
    config: AppConfig,
    *,
    bot_username: str = "",
    completion_client: CompletionClient | None = None,
) -> RuntimeContext:
    client = completion_client or CompletionClient(
        config.llm_api_key,
        base_url=config.llm_base_url,
        model=config.llm_model,
        max_tokens=config.llm_max_tokens,
        timeout=config.llm_timeout_sec,
    )
    return RuntimeContext(
        bot_username=bot_username,
        owner_username=config.owner_username,
        owner_user_id=config.owner_user_id,
        owner_info=config.owner_info,
        bot_name=config.bot_name,
        state=ProcessState(),
        memory=MemoryStore(max_users=config.memory_max_users),
        completion_client=client,
    )
