from telegram.ext import CallbackQueryHandler, ChatMemberHandler, CommandHandler, MessageHandler

from trollbot.app_factory import build_application, build_runtime
from trollbot.config import load_config
from trollbot.llm_client import CompletionClient

ENV = {
    "TELEGRAM_BOT_TOKEN": "123456:ABCDEF",
    "GROQ_API_KEY": "gsk_test",
    "OWNER_USERNAME": "boss",
    "OWNER_ID": "1001",
    "MEMORY_MAX_USERS": "5",
}


def test_build_runtime_wires_services():
    config = load_config(ENV)
    runtime = build_runtime(config, bot_username="trollgod_bot")

    assert isinstance(runtime.completion_client, CompletionClient)
    assert runtime.completion_client.model == config.llm_model
    assert runtime.router_settings().bot_username == "trollgod_bot"
    assert runtime.to_bot_data() == {"runtime": runtime}


def test_build_application_registers_handlers():
    config = load_config(ENV)
    runtime = build_runtime(config)
    application = build_application(config, runtime)

    handlers = application.handlers[0]
    commands = {name for handler in handlers if isinstance(handler, CommandHandler) for name in handler.commands}
    assert commands == {"panel", "broadcast"}
    assert any(isinstance(handler, CallbackQueryHandler) for handler in handlers)
    assert any(isinstance(handler, ChatMemberHandler) for handler in handlers)
    assert any(isinstance(handler, MessageHandler) for handler in handlers)
    assert application.bot_data["runtime"] is runtime


def test_build_application_processes_updates_concurrently():
    config = load_config(ENV)
    application = build_application(config, build_runtime(config))

    assert application.concurrent_updates > 1
