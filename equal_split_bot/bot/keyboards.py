from __future__ import annotations

from typing import Sequence

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from equal_split_bot.bot.callbacks import (
    CloseCb,
    DigitCb,
    NumActionCb,
    PersonActionCb,
    PickPersonCb,
    SheetActionCb,
)
from equal_split_bot.bot.text import format_amount, short_name
from equal_split_bot.services.sheet import SheetLimits
from equal_split_bot.services.shares import Participant


def close_keyboard(*, initiator_user_id: int, text: str = "Close") -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.row(
        InlineKeyboardButton(text=text, callback_data=CloseCb(initiator=initiator_user_id).pack()),
        width=1,
    )
    return kb.as_markup()


def numeric_keyboard(*, initiator_user_id: int, field: str) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    digits = [
        [1, 2, 3],
        [4, 5, 6],
        [7, 8, 9],
    ]
    for row in digits:
        kb.row(
            *[
                InlineKeyboardButton(
                    text=str(d),
                    callback_data=DigitCb(initiator=initiator_user_id, field=field, digit=d).pack(),
                )
                for d in row
            ],
            width=3,
        )
    kb.row(
        InlineKeyboardButton(text="0", callback_data=DigitCb(initiator=initiator_user_id, field=field, digit=0).pack()),
        InlineKeyboardButton(text="⬅️", callback_data=NumActionCb(initiator=initiator_user_id, field=field, action="back").pack()),
        InlineKeyboardButton(text="C", callback_data=NumActionCb(initiator=initiator_user_id, field=field, action="clear").pack()),
        width=3,
    )
    kb.row(
        InlineKeyboardButton(text="Cancel", callback_data=NumActionCb(initiator=initiator_user_id, field=field, action="cancel").pack()),
        InlineKeyboardButton(text="OK", callback_data=NumActionCb(initiator=initiator_user_id, field=field, action="ok").pack()),
        width=2,
    )
    return kb.as_markup()


def sheet_keyboard(
    *,
    initiator_user_id: int,
    participants: Sequence[Participant],
    limits: SheetLimits,
    currency: str = "₹",
) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    for i, p in enumerate(participants):
        kb.row(
            InlineKeyboardButton(
                text=f"✏️ {short_name(p.name)} · {format_amount(p.paid, currency)}",
                callback_data=PickPersonCb(initiator=initiator_user_id, index=i).pack(),
            )
        )

    n = len(participants)
    resize_row: list[InlineKeyboardButton] = []
    if n > limits.min_people:
        resize_row.append(
            InlineKeyboardButton(
                text=f"➖ {n - 1} people",
                callback_data=SheetActionCb(initiator=initiator_user_id, action="less").pack(),
            )
        )
    if n < limits.max_people:
        resize_row.append(
            InlineKeyboardButton(
                text=f"➕ {n + 1} people",
                callback_data=SheetActionCb(initiator=initiator_user_id, action="more").pack(),
            )
        )
    if resize_row:
        kb.row(*resize_row, width=len(resize_row))

    kb.row(
        InlineKeyboardButton(text="Add person", callback_data=SheetActionCb(initiator=initiator_user_id, action="add").pack()),
        InlineKeyboardButton(text="Reset", callback_data=SheetActionCb(initiator=initiator_user_id, action="reset").pack()),
        InlineKeyboardButton(text="Close", callback_data=CloseCb(initiator=initiator_user_id).pack()),
        width=3,
    )
    return kb.as_markup()


def person_keyboard(*, initiator_user_id: int, index: int, can_remove: bool) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.row(
        InlineKeyboardButton(text="Name", callback_data=PersonActionCb(initiator=initiator_user_id, index=index, action="name").pack()),
        InlineKeyboardButton(text="Paid", callback_data=PersonActionCb(initiator=initiator_user_id, index=index, action="paid").pack()),
        width=2,
    )
    bottom = []
    if can_remove:
        bottom.append(
            InlineKeyboardButton(text="Remove", callback_data=PersonActionCb(initiator=initiator_user_id, index=index, action="remove").pack())
        )
    bottom.append(
        InlineKeyboardButton(text="Back", callback_data=PersonActionCb(initiator=initiator_user_id, index=index, action="back").pack())
    )
    kb.row(*bottom, width=len(bottom))
    return kb.as_markup()


def back_keyboard(*, initiator_user_id: int, index: int = -1) -> InlineKeyboardMarkup:
    kb = InlineKeyboardBuilder()
    kb.row(
        InlineKeyboardButton(text="Back", callback_data=PersonActionCb(initiator=initiator_user_id, index=index, action="back").pack()),
        width=1,
    )
    return kb.as_markup()
