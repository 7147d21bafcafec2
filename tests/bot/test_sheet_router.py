from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.filters import CommandObject

from equal_split_bot.bot.callbacks import DigitCb, NumActionCb, PersonActionCb, PickPersonCb, SheetActionCb
from equal_split_bot.bot.routers.sheet import (
    name_entered,
    paid_action_cb,
    paid_digit_cb,
    person_action_cb,
    person_entered,
    pick_person_cb,
    sheet_action_cb,
    split_cmd,
)
from equal_split_bot.bot.states import SheetFlow
from equal_split_bot.bot.storage import load_sheet
from equal_split_bot.services.shares import Participant

USER_ID = 42
CHAT_ID = 1001

SHEET_MESSAGE_ID = 100


def _callback(user_id=USER_ID, message_id=SHEET_MESSAGE_ID):
    callback = AsyncMock()
    callback.from_user.id = user_id
    callback.message.message_id = message_id
    callback.message.chat.id = CHAT_ID
    return callback


def _message(text=""):
    message = AsyncMock()
    message.from_user.id = USER_ID
    message.chat.id = CHAT_ID
    message.message_id = 555
    message.text = text
    message.answer.return_value = MagicMock(message_id=SHEET_MESSAGE_ID)
    return message


async def _sheet(state):
    return load_sheet(await state.get_data())


async def _open_sheet(state, limits, args="3"):
    await split_cmd(
        _message(),
        command=CommandObject(prefix="/", command="split", args=args),
        state=state,
        limits=limits,
        default_people=2,
        currency="₹",
    )


@pytest.mark.asyncio
async def test_split_opens_placeholder_sheet(state, limits):
    await _open_sheet(state, limits)

    data = await state.get_data()
    assert data["sheet_message_id"] == SHEET_MESSAGE_ID
    assert data["initiator_user_id"] == USER_ID
    assert [p.name for p in await _sheet(state)] == ["Person 1", "Person 2", "Person 3"]


@pytest.mark.asyncio
async def test_split_clamps_head_count(state, limits):
    await _open_sheet(state, limits, args="1")

    assert len(await _sheet(state)) == 2


@pytest.mark.asyncio
async def test_split_rejects_bad_argument(state, limits):
    message = _message()

    await split_cmd(
        message,
        command=CommandObject(prefix="/", command="split", args="many"),
        state=state,
        limits=limits,
        default_people=2,
        currency="₹",
    )

    assert "Usage" in message.answer.call_args.args[0]
    assert await state.get_data() == {}


@pytest.mark.asyncio
async def test_buttons_are_bound_to_initiator(state, limits):
    await _open_sheet(state, limits)
    callback = _callback(user_id=7)

    await pick_person_cb(
        callback,
        callback_data=PickPersonCb(initiator=USER_ID, index=0),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )

    assert callback.answer.call_args.kwargs["show_alert"] is True
    callback.message.edit_text.assert_not_awaited()


@pytest.mark.asyncio
async def test_stale_sheet_message_is_refused(state, limits):
    await _open_sheet(state, limits)
    callback = _callback(message_id=99)

    await sheet_action_cb(
        callback,
        callback_data=SheetActionCb(initiator=USER_ID, action="reset"),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )

    assert "closed" in callback.answer.call_args.args[0]


@pytest.mark.asyncio
async def test_enter_paid_with_keypad(state, limits):
    await _open_sheet(state, limits)

    await person_action_cb(
        _callback(),
        callback_data=PersonActionCb(initiator=USER_ID, index=1, action="paid"),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )
    assert await state.get_state() == SheetFlow.entering_paid.state

    for digit in (0, 4, 5):
        await paid_digit_cb(
            _callback(),
            callback_data=DigitCb(initiator=USER_ID, field="paid", digit=digit),
            state=state,
            sheet=await _sheet(state),
            currency="₹",
        )
    assert (await state.get_data())["paid_str"] == "45"

    callback = _callback()
    await paid_action_cb(
        callback,
        callback_data=NumActionCb(initiator=USER_ID, field="paid", action="ok"),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )

    assert [p.paid for p in await _sheet(state)] == [0, 45, 0]
    assert await state.get_state() is None
    text = callback.bot.edit_message_text.call_args.kwargs["text"]
    assert "<b>Total:</b> ₹45" in text
    assert "<b>Per person:</b> ₹15" in text


@pytest.mark.asyncio
async def test_rename_from_text_message(state, limits):
    await _open_sheet(state, limits)
    await person_action_cb(
        _callback(),
        callback_data=PersonActionCb(initiator=USER_ID, index=0, action="name"),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )
    assert await state.get_state() == SheetFlow.editing_name.state

    bot = AsyncMock()
    await name_entered(_message("  Alice "), bot=bot, state=state, sheet=await _sheet(state), limits=limits, currency="₹")

    assert (await _sheet(state))[0].name == "Alice"
    bot.delete_message.assert_awaited_once_with(chat_id=CHAT_ID, message_id=555)
    assert bot.edit_message_text.call_args.kwargs["message_id"] == SHEET_MESSAGE_ID


@pytest.mark.asyncio
async def test_add_person_from_text_message(state, limits):
    await _open_sheet(state, limits, args="2")
    await sheet_action_cb(
        _callback(),
        callback_data=SheetActionCb(initiator=USER_ID, action="add"),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )
    assert await state.get_state() == SheetFlow.adding_person.state

    await person_entered(_message("Dana 60"), bot=AsyncMock(), state=state, sheet=await _sheet(state), limits=limits, currency="₹")

    assert (await _sheet(state))[-1] == Participant("Dana", 60)


@pytest.mark.asyncio
async def test_add_person_rejects_fraction(state, limits):
    await _open_sheet(state, limits, args="2")
    await state.set_state(SheetFlow.adding_person)
    message = _message("Dana 60.5")

    await person_entered(message, bot=AsyncMock(), state=state, sheet=await _sheet(state), limits=limits, currency="₹")

    assert "whole" in message.answer.call_args.args[0]
    assert len(await _sheet(state)) == 2


@pytest.mark.asyncio
async def test_remove_refused_at_minimum(state, limits):
    await _open_sheet(state, limits, args="2")
    callback = _callback()

    await person_action_cb(
        callback,
        callback_data=PersonActionCb(initiator=USER_ID, index=0, action="remove"),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )

    assert callback.answer.call_args.kwargs["show_alert"] is True
    assert len(await _sheet(state)) == 2


@pytest.mark.asyncio
async def test_resize_and_reset(state, limits):
    await _open_sheet(state, limits)
    await state.update_data(sheet=[{"name": "A", "paid": 9}, {"name": "B", "paid": 3}, {"name": "C", "paid": 0}])

    await sheet_action_cb(
        _callback(),
        callback_data=SheetActionCb(initiator=USER_ID, action="reset"),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )
    assert [(p.name, p.paid) for p in await _sheet(state)] == [("A", 0), ("B", 0), ("C", 0)]

    await sheet_action_cb(
        _callback(),
        callback_data=SheetActionCb(initiator=USER_ID, action="more"),
        state=state,
        sheet=await _sheet(state),
        limits=limits,
        currency="₹",
    )
    assert [p.name for p in await _sheet(state)] == ["Person 1", "Person 2", "Person 3", "Person 4"]
