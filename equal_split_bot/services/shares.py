from __future__ import annotations

import math
from dataclasses import dataclass, replace
from decimal import Decimal
from numbers import Integral, Rational, Real
from typing import Iterable


@dataclass(frozen=True)
class Participant:
    name: str
    paid: int = 0
    balance: int = 0  # positive gets money back, negative owes


@dataclass(frozen=True)
class Summary:
    total_amount: int = 0
    per_person_share: int = 0  # the larger share when the total does not divide evenly
    transaction_count: int = 0


@dataclass(frozen=True)
class ShareResult:
    summary: Summary
    participants: list[Participant]
    extra_unit_count: int = 0


def is_amount(value: object) -> bool:
    """A finite number: int, float, Fraction or Decimal. Booleans do not count."""
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, Rational):
        return True
    if isinstance(value, Real):
        return math.isfinite(value)
    return False


def whole_amount(value: object) -> int:
    """
    Normalizes a paid amount to a non-negative whole number.

    None, negatives, NaN, infinities and non-numeric values become 0.
    Fractions are floored.
    """
    if not is_amount(value):
        return 0
    if isinstance(value, Integral):
        return int(value) if value > 0 else 0
    if value <= 0:
        return 0
    return math.floor(value)


def compute_shares(participants: Iterable[Participant], count: int) -> ShareResult:
    """
    Equal split with an ordered remainder.

      base = total // count
      remainder = total - base * count
      +1 for the first `remainder` participants in input order.

    balance = paid - share. Returns new Participant objects.
    """
    people = [replace(p, paid=whole_amount(p.paid)) for p in participants]
    total = sum(p.paid for p in people)

    if count <= 0 or total == 0:
        return ShareResult(
            summary=Summary(),
            participants=[replace(p, balance=0) for p in people],
        )

    share = total // count
    remainder = total - share * count

    out = [
        replace(p, balance=p.paid - (share + (1 if i < remainder else 0)))
        for i, p in enumerate(people)
    ]
    return ShareResult(
        summary=Summary(
            total_amount=total,
            per_person_share=share + (1 if remainder > 0 else 0),
        ),
        participants=out,
        extra_unit_count=remainder,
    )
