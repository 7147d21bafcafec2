from __future__ import annotations

from aiogram.filters.callback_data import CallbackData


class CloseCb(CallbackData, prefix="close"):
    initiator: int


class DigitCb(CallbackData, prefix="digit"):
    initiator: int
    field: str  # "paid"
    digit: int


class NumActionCb(CallbackData, prefix="numact"):
    initiator: int
    field: str  # "paid"
    action: str  # ok | back | clear | cancel


class PickPersonCb(CallbackData, prefix="pickp"):
    initiator: int
    index: int


class PersonActionCb(CallbackData, prefix="pact"):
    initiator: int
    index: int
    action: str  # name | paid | remove | back


class SheetActionCb(CallbackData, prefix="sheet"):
    initiator: int
    action: str  # less | more | add | reset
