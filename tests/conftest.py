import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from equal_split_bot.services.sheet import SheetLimits
from equal_split_bot.services.shares import Participant

USER_ID = 42
CHAT_ID = 1001


@pytest.fixture
def limits():
    return SheetLimits(min_people=2, max_people=20)


@pytest.fixture
def state():
    """Real in-memory FSM context for one user in one chat."""
    return FSMContext(
        storage=MemoryStorage(),
        key=StorageKey(bot_id=1, chat_id=CHAT_ID, user_id=USER_ID),
    )


@pytest.fixture
def scenario_a():
    return [
        Participant(name="A", paid=90),
        Participant(name="B", paid=30),
        Participant(name="C", paid=0),
    ]
