from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.exceptions import TelegramUnauthorizedError
from aiogram.fsm.storage.memory import MemoryStorage

from equal_split_bot.bot.middlewares import SheetMiddleware
from equal_split_bot.bot.routers import all_routers
from equal_split_bot.config import settings
from equal_split_bot.logging import configure_logging
from equal_split_bot.services.sheet import SheetLimits, clamp_count

logger = logging.getLogger(__name__)


def build_dispatcher() -> Dispatcher:
    limits = SheetLimits(min_people=settings.min_people, max_people=settings.max_people)

    dp = Dispatcher(storage=MemoryStorage())
    dp.message.middleware(SheetMiddleware())
    dp.callback_query.middleware(SheetMiddleware())

    dp.workflow_data.update(
        {
            "limits": limits,
            "default_people": clamp_count(settings.default_people, limits),
            "currency": settings.currency_symbol,
        }
    )

    for r in all_routers():
        dp.include_router(r)
    return dp


async def main() -> None:
    configure_logging(settings.log_level)

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    try:
        try:
            me = await bot.get_me()
        except TelegramUnauthorizedError as e:
            logger.error("Telegram Unauthorized. Check BOT_TOKEN in .env (BotFather token). %s", e)
            raise

        dp = build_dispatcher()

        logger.info("Starting bot as @%s", me.username)
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await bot.session.close()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
