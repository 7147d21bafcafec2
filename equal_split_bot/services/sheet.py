from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence

from equal_split_bot.services.shares import Participant, is_amount, whole_amount

MAX_NAME_LENGTH = 64


@dataclass(frozen=True)
class SheetLimits:
    min_people: int = 2
    max_people: int = 20


class SheetError(ValueError):
    pass


def _check_name(name: str) -> str:
    if len(name) > MAX_NAME_LENGTH:
        raise SheetError(f"Names are limited to {MAX_NAME_LENGTH} characters.")
    return name


def default_name(index: int) -> str:
    return f"Person {index + 1}"


def initialize_participants(count: int) -> list[Participant]:
    return [Participant(name=default_name(i)) for i in range(max(0, count))]


def clamp_count(count: int, limits: SheetLimits = SheetLimits()) -> int:
    return max(limits.min_people, min(limits.max_people, int(count)))


def resize(count: int, limits: SheetLimits = SheetLimits()) -> list[Participant]:
    # Changing the head count starts a fresh sheet.
    return initialize_participants(clamp_count(count, limits))


def _check_index(participants: Sequence[Participant], index: int) -> None:
    if not 0 <= index < len(participants):
        raise SheetError(f"No person #{index + 1} on this sheet.")


def rename_participant(participants: Sequence[Participant], index: int, name: str) -> list[Participant]:
    _check_index(participants, index)
    name = _check_name((name or "").strip()) or default_name(index)
    return [replace(p, name=name) if i == index else p for i, p in enumerate(participants)]


def set_paid(participants: Sequence[Participant], index: int, amount: object) -> list[Participant]:
    _check_index(participants, index)
    paid = whole_amount(amount)
    return [replace(p, paid=paid) if i == index else p for i, p in enumerate(participants)]


def add_participant(
    participants: Sequence[Participant],
    name: str,
    paid: object = 0,
    limits: SheetLimits = SheetLimits(),
) -> list[Participant]:
    name = (name or "").strip()
    if not name:
        raise SheetError("Name must not be empty.")
    _check_name(name)
    if len(participants) >= limits.max_people:
        raise SheetError(f"At most {limits.max_people} people per sheet.")
    return [*participants, Participant(name=name, paid=whole_amount(paid))]


def remove_participant(
    participants: Sequence[Participant],
    index: int,
    limits: SheetLimits = SheetLimits(),
) -> list[Participant]:
    _check_index(participants, index)
    if len(participants) <= limits.min_people:
        raise SheetError(f"At least {limits.min_people} people are needed.")
    return [p for i, p in enumerate(participants) if i != index]


def reset_paid(participants: Sequence[Participant]) -> list[Participant]:
    return [replace(p, paid=0, balance=0) for p in participants]


def validate_participants(participants: Sequence[Participant]) -> bool:
    """Advisory check for the input side; the calculators normalize anyway."""
    return all(
        bool((p.name or "").strip())
        and is_amount(p.paid)
        and p.paid >= 0
        for p in participants
    )
