from __future__ import annotations

import asyncio
import logging
import os
import sys
from pathlib import Path

from telegram import BotCommand, BotCommandScopeChat, Update
from telegram.error import TelegramError

from trollbot.app_factory import build_application, build_runtime
from trollbot.config import ConfigError, load_config, resolve_environment


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("bot")


async def main() -> None:
    env = resolve_environment(os.environ, Path(__file__).with_name(".env"))
    config = load_config(env)
    logging.getLogger().setLevel(config.log_level)

    runtime = build_runtime(config)
    application = build_application(config, runtime)

    try:
        await application.initialize()
        me = await application.bot.get_me()
        runtime.bot_username = me.username or ""
        try:
            await application.bot.set_my_commands(
                [
                    BotCommand("panel", "Control panel"),
                    BotCommand("broadcast", "Send a message to every group"),
                ],
                scope=BotCommandScopeChat(chat_id=config.owner_user_id),
            )
        except TelegramError:
            logger.warning("Could not set owner commands for OWNER_ID=%s", config.owner_user_id)
        await application.start()
        await application.updater.start_polling(allowed_updates=Update.ALL_TYPES)
        logger.info("Bot started as @%s", me.username)
        await asyncio.Event().wait()
    finally:
        await runtime.completion_client.aclose()
        if application.updater and application.updater.running:
            await application.updater.stop()
        if application.running:
            await application.stop()
        await application.shutdown()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except ConfigError as exc:
        logger.critical("%s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        pass
