from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Iterable

from equal_split_bot.services.shares import Participant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transfer:
    from_name: str  # debtor
    to_name: str  # creditor
    amount: int


class SettlementError(Exception):
    pass


class UnbalancedBalancesError(SettlementError):
    def __init__(self, total: int) -> None:
        super().__init__(f"Balances must sum to zero, got {total:+d}.")
        self.total = total


def optimize(participants: Iterable[Participant], *, strict: bool = False) -> list[Transfer]:
    """
    Greedy extreme pairing: the most negative balance pays the most positive one
    until every balance is zero.

    Ties go to the first entry in input order on both sides, so the plan is
    deterministic. Each step zeroes at least one side, at most N-1 transfers.

    With strict=True, balances that do not sum to zero raise
    UnbalancedBalancesError instead of yielding a partial plan.
    """
    work: list[list] = [[p.name, int(p.balance)] for p in participants if p.balance != 0]  # [name, balance]

    if strict:
        total = sum(bal for _name, bal in work)
        if total != 0:
            raise UnbalancedBalancesError(total)

    out: list[Transfer] = []
    while len(work) > 1:
        d = 0
        for i in range(1, len(work)):
            if work[i][1] < work[d][1]:
                d = i
        c = 0
        for i in range(1, len(work)):
            if work[i][1] > work[c][1]:
                c = i

        debtor = work[d]
        creditor = work[c]
        if debtor[1] >= 0 or creditor[1] <= 0:
            logger.warning(
                "Settlement stopped early with unbalanced leftovers: %s",
                ", ".join(f"{name}={bal:+d}" for name, bal in work),
            )
            break

        amt = min(-debtor[1], creditor[1])
        if amt > 0:
            out.append(Transfer(from_name=debtor[0], to_name=creditor[0], amount=amt))
            debtor[1] += amt
            creditor[1] -= amt

        settled = []
        if debtor[1] == 0:
            settled.append(d)
        if creditor[1] == 0 and c != d:
            settled.append(c)
        for idx in sorted(settled, reverse=True):
            del work[idx]

    return out


def remaining_balances(participants: Iterable[Participant], transfers: Iterable[Transfer]) -> dict[str, int]:
    # Paying raises the sender's balance towards zero, receiving lowers it.
    left: dict[str, int] = defaultdict(int)
    for p in participants:
        left[p.name] += p.balance
    for t in transfers:
        left[t.from_name] += t.amount
        left[t.to_name] -= t.amount
    return dict(left)
