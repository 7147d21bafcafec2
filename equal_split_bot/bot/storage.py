from __future__ import annotations

from typing import Any, Sequence

from aiogram.fsm.context import FSMContext

from equal_split_bot.services.sheet import default_name
from equal_split_bot.services.shares import Participant, whole_amount


def load_sheet(data: dict[str, Any]) -> list[Participant]:
    rows = data.get("sheet") or []
    return [
        Participant(
            name=str(row.get("name") or "").strip() or default_name(i),
            paid=whole_amount(row.get("paid")),
        )
        for i, row in enumerate(rows)
    ]


def dump_sheet(participants: Sequence[Participant]) -> list[dict[str, Any]]:
    # Balances are derived, never stored.
    return [{"name": p.name, "paid": p.paid} for p in participants]


async def save_sheet(state: FSMContext, participants: Sequence[Participant]) -> None:
    await state.update_data(sheet=dump_sheet(participants))
