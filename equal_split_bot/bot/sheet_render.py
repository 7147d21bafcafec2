from __future__ import annotations

import html

from equal_split_bot.bot.text import badge_icon, balance_badge, format_amount, plural, short_name
from equal_split_bot.services.splitter import SplitResult

MESSAGE_LIMIT = 4096
# Room for the "… and N more" line.
_MORE_RESERVE = 24


def _esc(s: str) -> str:
    return html.escape(s, quote=False)


def _fit(lines: list[str], budget: int) -> list[str]:
    # Drops whole lines, never cuts inside markup.
    out: list[str] = []
    used = 0
    for i, line in enumerate(lines):
        cost = len(line) + 1
        rest = len(lines) - i - 1
        if used + cost > budget - (_MORE_RESERVE if rest else 0):
            out.append(f"… and {len(lines) - i} more")
            break
        out.append(line)
        used += cost
    return out


def render_share_line(result: SplitResult, currency: str = "₹") -> str:
    share = result.summary.per_person_share
    n = result.extra_unit_count
    if n > 0:
        low = format_amount(share - 1, currency)
        high = format_amount(share, currency)
        return f"{low} - {high} ({plural(n, 'person', 'people')} {'pays' if n == 1 else 'pay'} {currency}1 extra)"
    return format_amount(share, currency)


def render_sheet(result: SplitResult, *, currency: str = "₹", title: str = "Split") -> str:
    cur = _esc(currency)
    lines_people: list[str] = []
    for i, p in enumerate(result.participants, start=1):
        name = _esc(short_name(p.name))
        paid = format_amount(p.paid, cur)
        badge = f"{badge_icon(p)} {balance_badge(p)}"
        if p.balance:
            badge += f" {format_amount(abs(p.balance), cur)}"
        lines_people.append(f"{i}. <b>{name}</b> paid {paid}: {badge}")

    lines_settle = [
        f"#{n} {_esc(short_name(t.from_name))} → {_esc(short_name(t.to_name))}: {format_amount(t.amount, cur)}"
        for n, t in enumerate(result.transfers, start=1)
    ]

    summary = result.summary
    head = f"<b>🧾 {_esc(short_name(title))}</b>\n\n"
    totals = (
        "\n\n"
        f"<b>Total:</b> {format_amount(summary.total_amount, cur)}\n"
        f"<b>Per person:</b> {render_share_line(result, cur)}\n"
        f"<b>Transactions:</b> {summary.transaction_count}\n"
    )
    if result.is_empty:
        tail = "\n<i>Enter what everyone paid to split the bill.</i>"
    elif result.is_even:
        tail = "\n✅ <b>Everyone is even.</b> No payments needed."
    else:
        tail = (
            f"\n<b>Settlement plan</b> (only {plural(len(result.transfers), 'transaction')} needed):\n"
            "<pre></pre>"
        )

    budget = MESSAGE_LIMIT - len(head) - len(totals) - len(tail)
    if lines_settle:
        # People get at most half the room, the plan takes the rest.
        people_txt = "\n".join(_fit(lines_people, budget // 2))
        settle_txt = "\n".join(_fit(lines_settle, budget - len(people_txt)))
        tail = tail[: -len("</pre>")] + settle_txt + "</pre>"
    else:
        people_txt = "\n".join(_fit(lines_people, budget))

    return head + people_txt + totals + tail
