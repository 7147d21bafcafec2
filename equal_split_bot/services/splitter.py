from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from equal_split_bot.services.settlement import Transfer, optimize
from equal_split_bot.services.shares import Participant, Summary, compute_shares

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitResult:
    summary: Summary
    participants: list[Participant]
    transfers: list[Transfer]
    extra_unit_count: int = 0

    @property
    def is_empty(self) -> bool:
        # Nothing paid yet: "ready to split".
        return self.summary.total_amount == 0

    @property
    def is_even(self) -> bool:
        return self.summary.total_amount > 0 and not self.transfers


def split(participants: Sequence[Participant], count: Optional[int] = None) -> SplitResult:
    if count is None:
        count = len(participants)

    shares = compute_shares(participants, count)
    transfers = optimize(shares.participants)
    summary = replace(shares.summary, transaction_count=len(transfers))

    logger.debug(
        "Split total=%s among %s: share=%s, %s transfer(s)",
        summary.total_amount,
        count,
        summary.per_person_share,
        summary.transaction_count,
    )
    return SplitResult(
        summary=summary,
        participants=shares.participants,
        transfers=transfers,
        extra_unit_count=shares.extra_unit_count,
    )
