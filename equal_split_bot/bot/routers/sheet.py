from __future__ import annotations

import html
import logging
from typing import Any, Optional, Sequence

from aiogram import Bot, F, Router
from aiogram.enums import ParseMode
from aiogram.filters import Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, InlineKeyboardMarkup, Message

from equal_split_bot.bot.callbacks import DigitCb, NumActionCb, PersonActionCb, PickPersonCb, SheetActionCb
from equal_split_bot.bot.keyboards import back_keyboard, numeric_keyboard, person_keyboard, sheet_keyboard
from equal_split_bot.bot.parsing import ParseError, parse_person_line
from equal_split_bot.bot.sheet_render import render_sheet
from equal_split_bot.bot.states import SheetFlow
from equal_split_bot.bot.storage import save_sheet
from equal_split_bot.bot.text import format_amount
from equal_split_bot.bot.utils import safe_delete_message, safe_edit_text
from equal_split_bot.services.sheet import (
    SheetError,
    SheetLimits,
    add_participant,
    remove_participant,
    rename_participant,
    reset_paid,
    resize,
    set_paid,
)
from equal_split_bot.services.shares import Participant
from equal_split_bot.services.splitter import split

logger = logging.getLogger(__name__)

router = Router(name=__name__)

MAX_PAID_DIGITS = 9


def sheet_view(
    sheet: Sequence[Participant],
    *,
    initiator_user_id: int,
    limits: SheetLimits,
    currency: str,
) -> tuple[str, InlineKeyboardMarkup]:
    text = render_sheet(split(sheet), currency=currency)
    kb = sheet_keyboard(initiator_user_id=initiator_user_id, participants=sheet, limits=limits, currency=currency)
    return text, kb


def _paid_prompt(p: Participant, digits: str, currency: str) -> str:
    return (
        f"<b>{html.escape(p.name, quote=False)}</b> paid: <b>{html.escape(currency, quote=False)}{digits or '0'}</b>\n\n"
        "Enter the amount with the buttons."
    )


async def _guard(callback: CallbackQuery, initiator: int, state: FSMContext) -> Optional[dict[str, Any]]:
    """Returns FSM data when the button belongs to the caller's open sheet."""
    if callback.from_user.id != initiator:
        await callback.answer("This button is not for you.", show_alert=True)
        return None
    data = await state.get_data()
    if not callback.message or data.get("sheet_message_id") != callback.message.message_id:
        await callback.answer("This sheet is closed. Send /split to start a new one.", show_alert=True)
        return None
    return data


async def _show_sheet(callback: CallbackQuery, sheet: Sequence[Participant], limits: SheetLimits, currency: str) -> None:
    text, kb = sheet_view(sheet, initiator_user_id=callback.from_user.id, limits=limits, currency=currency)
    await safe_edit_text(
        callback.bot,
        chat_id=callback.message.chat.id,
        message_id=callback.message.message_id,
        text=text,
        parse_mode=ParseMode.HTML,
        reply_markup=kb,
    )


async def _refresh_from_message(
    message: Message,
    bot: Bot,
    data: dict[str, Any],
    sheet: Sequence[Participant],
    limits: SheetLimits,
    currency: str,
) -> None:
    text, kb = sheet_view(sheet, initiator_user_id=message.from_user.id, limits=limits, currency=currency)
    await safe_edit_text(
        bot,
        chat_id=message.chat.id,
        message_id=int(data["sheet_message_id"]),
        text=text,
        parse_mode=ParseMode.HTML,
        reply_markup=kb,
    )


@router.message(Command("split"))
async def split_cmd(
    message: Message,
    command: CommandObject,
    state: FSMContext,
    limits: SheetLimits,
    default_people: int,
    currency: str,
) -> None:
    count = default_people
    if command.args:
        try:
            count = int(command.args.split()[0])
        except ValueError:
            await message.answer("Usage: <code>/split [number of people]</code>", parse_mode=ParseMode.HTML)
            return

    sheet = resize(count, limits)
    await state.clear()
    text, kb = sheet_view(sheet, initiator_user_id=message.from_user.id, limits=limits, currency=currency)
    msg = await message.answer(text, parse_mode=ParseMode.HTML, reply_markup=kb)
    await state.update_data(initiator_user_id=message.from_user.id, sheet_message_id=msg.message_id)
    await save_sheet(state, sheet)
    logger.info("Sheet opened by user_id=%s with %s people", message.from_user.id, len(sheet))


@router.callback_query(PickPersonCb.filter())
async def pick_person_cb(
    callback: CallbackQuery,
    callback_data: PickPersonCb,
    state: FSMContext,
    sheet: list[Participant],
    limits: SheetLimits,
    currency: str,
) -> None:
    if await _guard(callback, callback_data.initiator, state) is None:
        return
    if not 0 <= callback_data.index < len(sheet):
        await callback.answer("This person is no longer on the sheet.", show_alert=True)
        return
    p = sheet[callback_data.index]
    await state.set_state(None)
    await callback.message.edit_text(
        f"<b>{html.escape(p.name, quote=False)}</b>\nPaid: <b>{html.escape(format_amount(p.paid, currency), quote=False)}</b>\n\n"
        "What do you want to change?",
        parse_mode=ParseMode.HTML,
        reply_markup=person_keyboard(
            initiator_user_id=callback.from_user.id,
            index=callback_data.index,
            can_remove=len(sheet) > limits.min_people,
        ),
    )
    await callback.answer()


@router.callback_query(PersonActionCb.filter())
async def person_action_cb(
    callback: CallbackQuery,
    callback_data: PersonActionCb,
    state: FSMContext,
    sheet: list[Participant],
    limits: SheetLimits,
    currency: str,
) -> None:
    if await _guard(callback, callback_data.initiator, state) is None:
        return
    idx = callback_data.index

    if callback_data.action == "back":
        await state.set_state(None)
        await _show_sheet(callback, sheet, limits, currency)
        await callback.answer()
        return

    if not 0 <= idx < len(sheet):
        await callback.answer("This person is no longer on the sheet.", show_alert=True)
        return

    if callback_data.action == "name":
        await state.set_state(SheetFlow.editing_name)
        await state.update_data(edit_index=idx)
        await callback.message.edit_text(
            f"Send a new name for <b>{html.escape(sheet[idx].name, quote=False)}</b>.\n"
            "An empty name resets it to the placeholder.",
            parse_mode=ParseMode.HTML,
            reply_markup=back_keyboard(initiator_user_id=callback.from_user.id, index=idx),
        )
        await callback.answer()
        return

    if callback_data.action == "paid":
        await state.set_state(SheetFlow.entering_paid)
        await state.update_data(edit_index=idx, paid_str="")
        await callback.message.edit_text(
            _paid_prompt(sheet[idx], "", currency),
            parse_mode=ParseMode.HTML,
            reply_markup=numeric_keyboard(initiator_user_id=callback.from_user.id, field="paid"),
        )
        await callback.answer()
        return

    if callback_data.action == "remove":
        try:
            sheet = remove_participant(sheet, idx, limits)
        except SheetError as e:
            await callback.answer(str(e), show_alert=True)
            return
        await save_sheet(state, sheet)
        await state.set_state(None)
        await _show_sheet(callback, sheet, limits, currency)
        await callback.answer("Removed.")


@router.callback_query(DigitCb.filter(F.field == "paid"))
async def paid_digit_cb(
    callback: CallbackQuery,
    callback_data: DigitCb,
    state: FSMContext,
    sheet: list[Participant],
    currency: str,
) -> None:
    data = await _guard(callback, callback_data.initiator, state)
    if data is None:
        return
    idx = int(data.get("edit_index", -1))
    if not 0 <= idx < len(sheet):
        await callback.answer("Session expired. Send /split again.", show_alert=True)
        return
    s = str(data.get("paid_str") or "")
    if len(s) >= MAX_PAID_DIGITS:
        await callback.answer("Amount is too large.")
        return
    s = (s + str(callback_data.digit)).lstrip("0")
    await state.update_data(paid_str=s)
    await safe_edit_text(
        callback.bot,
        chat_id=callback.message.chat.id,
        message_id=callback.message.message_id,
        text=_paid_prompt(sheet[idx], s, currency),
        parse_mode=ParseMode.HTML,
        reply_markup=numeric_keyboard(initiator_user_id=callback.from_user.id, field="paid"),
    )
    await callback.answer()


@router.callback_query(NumActionCb.filter(F.field == "paid"))
async def paid_action_cb(
    callback: CallbackQuery,
    callback_data: NumActionCb,
    state: FSMContext,
    sheet: list[Participant],
    limits: SheetLimits,
    currency: str,
) -> None:
    data = await _guard(callback, callback_data.initiator, state)
    if data is None:
        return
    idx = int(data.get("edit_index", -1))
    s = str(data.get("paid_str") or "")

    if callback_data.action == "cancel":
        await state.set_state(None)
        await _show_sheet(callback, sheet, limits, currency)
        await callback.answer("Cancelled.")
        return

    if not 0 <= idx < len(sheet):
        await callback.answer("Session expired. Send /split again.", show_alert=True)
        return

    if callback_data.action == "ok":
        sheet = set_paid(sheet, idx, int(s or 0))
        await save_sheet(state, sheet)
        await state.set_state(None)
        await _show_sheet(callback, sheet, limits, currency)
        await callback.answer("Saved.")
        return

    if callback_data.action == "back":
        s = s[:-1]
    elif callback_data.action == "clear":
        s = ""
    else:
        await callback.answer()
        return

    await state.update_data(paid_str=s)
    await safe_edit_text(
        callback.bot,
        chat_id=callback.message.chat.id,
        message_id=callback.message.message_id,
        text=_paid_prompt(sheet[idx], s, currency),
        parse_mode=ParseMode.HTML,
        reply_markup=numeric_keyboard(initiator_user_id=callback.from_user.id, field="paid"),
    )
    await callback.answer()


@router.callback_query(SheetActionCb.filter())
async def sheet_action_cb(
    callback: CallbackQuery,
    callback_data: SheetActionCb,
    state: FSMContext,
    sheet: list[Participant],
    limits: SheetLimits,
    currency: str,
) -> None:
    if await _guard(callback, callback_data.initiator, state) is None:
        return

    if callback_data.action == "add":
        if len(sheet) >= limits.max_people:
            await callback.answer(f"At most {limits.max_people} people per sheet.", show_alert=True)
            return
        await state.set_state(SheetFlow.adding_person)
        await callback.message.edit_text(
            "Send the new person as <code>Name amount</code>, for example <code>Alice 250</code>.\n"
            "The amount is optional.",
            parse_mode=ParseMode.HTML,
            reply_markup=back_keyboard(initiator_user_id=callback.from_user.id),
        )
        await callback.answer()
        return

    if callback_data.action == "less":
        sheet = resize(len(sheet) - 1, limits)
    elif callback_data.action == "more":
        sheet = resize(len(sheet) + 1, limits)
    elif callback_data.action == "reset":
        sheet = reset_paid(sheet)
    else:
        await callback.answer()
        return

    await save_sheet(state, sheet)
    await state.set_state(None)
    await _show_sheet(callback, sheet, limits, currency)
    await callback.answer()


@router.message(SheetFlow.editing_name, F.text, ~F.text.startswith("/"))
async def name_entered(
    message: Message,
    bot: Bot,
    state: FSMContext,
    sheet: list[Participant],
    limits: SheetLimits,
    currency: str,
) -> None:
    data = await state.get_data()
    try:
        sheet = rename_participant(sheet, int(data.get("edit_index", -1)), message.text)
    except SheetError as e:
        await message.answer(html.escape(str(e), quote=False))
        return
    await save_sheet(state, sheet)
    await state.set_state(None)
    await safe_delete_message(bot, chat_id=message.chat.id, message_id=message.message_id)
    await _refresh_from_message(message, bot, data, sheet, limits, currency)


@router.message(SheetFlow.adding_person, F.text, ~F.text.startswith("/"))
async def person_entered(
    message: Message,
    bot: Bot,
    state: FSMContext,
    sheet: list[Participant],
    limits: SheetLimits,
    currency: str,
) -> None:
    data = await state.get_data()
    try:
        name, paid = parse_person_line(message.text)
        sheet = add_participant(sheet, name, paid, limits)
    except (ParseError, SheetError) as e:
        await message.answer(html.escape(str(e), quote=False))
        return
    await save_sheet(state, sheet)
    await state.set_state(None)
    await safe_delete_message(bot, chat_id=message.chat.id, message_id=message.message_id)
    await _refresh_from_message(message, bot, data, sheet, limits, currency)
