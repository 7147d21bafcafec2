from __future__ import annotations

from aiogram.fsm.state import State, StatesGroup


class SheetFlow(StatesGroup):
    editing_name = State()
    entering_paid = State()
    adding_person = State()
