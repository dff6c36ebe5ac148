# newton_irr/parsing.py
from __future__ import annotations

from typing import Tuple

from .errors import CashFlowParseError


def parse_cash_flows(text: str, sep: str = ",") -> Tuple[float, ...]:
    """
    '-3000, 1850, 1400, 1000' -> (-3000.0, 1850.0, 1400.0, 1000.0)
    Whitespace around tokens is ignored; empty or non-numeric tokens are errors.
    """
    if text is None or not str(text).strip():
        raise CashFlowParseError("no cash flows given")

    out = []
    for pos, raw in enumerate(str(text).split(sep)):
        token = raw.strip()
        if not token:
            raise CashFlowParseError(f"empty cash flow at position {pos}")
        try:
            out.append(float(token))
        except ValueError:
            raise CashFlowParseError(f"cash flow at position {pos} is not a number: {token!r}") from None
    return tuple(out)


__all__ = ["parse_cash_flows"]
