from __future__ import annotations

from aiogram import Router

from equal_split_bot.bot.routers.common_callbacks import router as common_callbacks_router
from equal_split_bot.bot.routers.public import router as public_router
from equal_split_bot.bot.routers.sheet import router as sheet_router


def all_routers() -> list[Router]:
    return [
        common_callbacks_router,
        sheet_router,
        public_router,
    ]
