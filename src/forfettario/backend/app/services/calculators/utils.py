"""Utility helpers for calculator modules."""

from __future__ import annotations

import re
from typing import Any

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def parse_rate_percent(value: Any) -> int | None:
    """Return the leading integer of ``value`` as a percentage.

    ``"15"``, ``" 15"``, ``"15.9"`` and ``"15%"`` all yield ``15``. Values with
    no leading digits, and negative percentages, yield ``None``.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        percent = value
    else:
        match = _LEADING_INTEGER.match(str(value))
        if match is None:
            return None
        percent = int(match.group(1))

    if percent < 0:
        return None
    return percent


__all__ = ["parse_rate_percent"]
