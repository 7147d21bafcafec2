from __future__ import annotations

from typing import Optional

from equal_split_bot.services.sheet import MAX_NAME_LENGTH
from equal_split_bot.services.shares import Participant


def format_amount(amount: int, currency: str = "₹") -> str:
    return f"{currency}{amount}"


def short_name(name: str, limit: int = MAX_NAME_LENGTH) -> str:
    return name if len(name) <= limit else name[: limit - 1] + "…"


def balance_badge(p: Participant) -> str:
    if p.balance > 0:
        return "Gets back"
    if p.balance < 0:
        return "Owes"
    return "Even"


def badge_icon(p: Participant) -> str:
    if p.balance > 0:
        return "🟢"
    if p.balance < 0:
        return "🔴"
    return "⚪"


def plural(n: int, word: str, many: Optional[str] = None) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {many or word + 's'}"
