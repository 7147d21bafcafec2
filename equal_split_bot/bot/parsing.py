from __future__ import annotations

import re

from equal_split_bot.services.sheet import MAX_NAME_LENGTH, SheetLimits
from equal_split_bot.services.shares import Participant

# The last token is an amount when it holds a digit; it is validated separately.
_LINE_RE = re.compile(r"^(?P<name>.+?)(?:\s*[:=]\s*|\s+)(?P<amount>\S*\d\S*)$")
_GROUPED_RE = re.compile(r"\d{1,3}(?:[.,]\d{3})+")
_FRACTION_RE = re.compile(r"[-+]?\d+[.,]\d+")


class ParseError(ValueError):
    pass


def parse_amount(text: str) -> int:
    """Whole, non-negative amounts only. Fractions are rejected, not rounded."""
    s = (text or "").strip()
    if not s:
        return 0
    if s.isdigit():
        return int(s)
    if _GROUPED_RE.fullmatch(s):
        raise ParseError(f"Write {s!r} without separators, for example {s.replace(',', '').replace('.', '')}.")
    if _FRACTION_RE.fullmatch(s):
        raise ParseError(f"Use whole amounts only: {s!r}.")
    raise ParseError(f"Not a non-negative whole number: {s!r}.")


def parse_person_line(line: str) -> tuple[str, int]:
    """'Alice 90', 'Alice: 90', 'Alice' -> (name, paid)."""
    line = line.strip()
    m = _LINE_RE.match(line)
    if m is None:
        name, paid = line, 0
    else:
        name, paid = m.group("name").strip(), parse_amount(m.group("amount"))
    if not name:
        raise ParseError("Missing name.")
    if len(name) > MAX_NAME_LENGTH:
        raise ParseError(f"Names are limited to {MAX_NAME_LENGTH} characters.")
    return name, paid


def parse_participants(text: str, limits: SheetLimits = SheetLimits()) -> list[Participant]:
    out: list[Participant] = []
    for n, raw in enumerate((text or "").splitlines(), start=1):
        if not raw.strip():
            continue
        try:
            name, paid = parse_person_line(raw)
        except ParseError as e:
            raise ParseError(f"Line {n}: {e}") from e
        out.append(Participant(name=name, paid=paid))

    if len(out) < limits.min_people:
        raise ParseError(f"List at least {limits.min_people} people, one per line.")
    if len(out) > limits.max_people:
        raise ParseError(f"At most {limits.max_people} people, got {len(out)}.")
    return out
