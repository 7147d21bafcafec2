from __future__ import annotations

import html

from aiogram import Router
from aiogram.enums import ParseMode
from aiogram.filters import Command, CommandObject, CommandStart
from aiogram.types import Message

from equal_split_bot.bot.keyboards import close_keyboard
from equal_split_bot.bot.parsing import ParseError, parse_participants
from equal_split_bot.bot.sheet_render import render_sheet
from equal_split_bot.services.sheet import SheetLimits
from equal_split_bot.services.splitter import split

router = Router(name=__name__)

HELP_TEXT = (
    "<b>Split a bill equally</b>\n\n"
    "/split [people] opens a sheet you can edit with buttons.\n"
    "/settle with one person per line gives a quick answer:\n"
    "<pre>/settle\nAlice 90\nBob 30\nCarol 0</pre>\n"
    "Amounts are whole numbers. Leftover units go to the first people in the list."
)

SETTLE_USAGE = "Send one person per line after the command:\n<pre>/settle\nAlice 90\nBob 30\nCarol 0</pre>"


@router.message(CommandStart())
@router.message(Command("help"))
async def help_cmd(message: Message) -> None:
    await message.answer(HELP_TEXT, parse_mode=ParseMode.HTML)


@router.message(Command("settle"))
async def settle_cmd(message: Message, command: CommandObject, limits: SheetLimits, currency: str) -> None:
    if not command.args:
        await message.answer(SETTLE_USAGE, parse_mode=ParseMode.HTML)
        return
    try:
        participants = parse_participants(command.args, limits)
    except ParseError as e:
        await message.answer(html.escape(str(e), quote=False), parse_mode=ParseMode.HTML)
        return

    await message.answer(
        render_sheet(split(participants), currency=currency, title="Quick split"),
        parse_mode=ParseMode.HTML,
        reply_markup=close_keyboard(initiator_user_id=message.from_user.id),
    )
