from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from aiogram import BaseMiddleware
from aiogram.fsm.context import FSMContext
from aiogram.types import TelegramObject

from equal_split_bot.bot.storage import load_sheet


class SheetMiddleware(BaseMiddleware):
    """Puts the caller's participant sheet into handler data as `sheet`."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        state: Optional[FSMContext] = data.get("state")
        if state is None:
            data["sheet"] = []
            return await handler(event, data)

        data["sheet"] = load_sheet(await state.get_data())
        return await handler(event, data)
