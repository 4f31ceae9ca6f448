#!/usr/bin/env python3
"""
Formatting utilities for demo console output.

Percentage changes against the baseline and the fixed-width comparison
table printed after every capture.
"""

from decimal import Decimal, ROUND_HALF_EVEN, localcontext
from typing import Iterable, List, Optional, Tuple

from core.models.metrics import MetricsKey, MetricsRecord, Baseline

NOT_APPLICABLE = "N/A"

TABLE_COLUMNS = [
    ("Java Version", "------------", 15),
    ("Spring Version", "-------------", 15),
    ("App Type", "--------", 15),
    ("Startup Time (ms)", "----------------", 20),
    ("Time Change", "-----------", 15),
    ("Memory Used (bytes)", "------------------", 20),
    ("Memory Change", "-------------", 15),
]

_ONE_DECIMAL = Decimal("0.1")

# wide enough for the integer part of any ratio of two floats
_PRECISION = 1000


def percent_change(current: float, baseline: float) -> str:
    """
    Format the change of ``current`` relative to ``baseline``.

    Returns "N/A" when the baseline is zero or either value is not finite.
    Otherwise the change is computed in decimal arithmetic and rounded once
    to one decimal place, with a leading "+" for positive values ("+12.3%", "-4.5%", "0.0%").
    """
    base = Decimal(str(baseline))
    value = Decimal(str(current))
    if base == 0 or not (base.is_finite() and value.is_finite()):
        return NOT_APPLICABLE

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        change = (value - base) / base * 100
        change = change.quantize(_ONE_DECIMAL, rounding=ROUND_HALF_EVEN)

    if change > 0:
        return f"+{change}%"
    if change == 0:
        # quantize keeps the sign of tiny negatives
        return "0.0%"
    return f"{change}%"


def _format_row(values: List[str]) -> str:
    return " ".join(f"{value:<{width}}" for value, (_, _, width) in zip(values, TABLE_COLUMNS))


def render_table(entries: Iterable[Tuple[MetricsKey, MetricsRecord]],
                 baseline: Optional[Baseline]) -> str:
    """
    Render the comparison table.

    Args:
        entries: (key, record) pairs in run order
        baseline: First captured record, or None when nothing was captured

    Returns:
        Header, separator and one line per entry, joined by newlines
    """
    lines = [
        _format_row([title for title, _, _ in TABLE_COLUMNS]),
        _format_row([rule for _, rule, _ in TABLE_COLUMNS]),
    ]

    for key, record in entries:
        if baseline is None:
            time_change = memory_change = NOT_APPLICABLE
        else:
            time_change = percent_change(record.startup_time_ms, baseline.startup_time_ms)
            memory_change = percent_change(record.memory_used_bytes, baseline.memory_used_bytes)

        lines.append(_format_row([
            key.java_version,
            key.spring_version,
            key.run_label,
            f"{record.startup_time_ms:.3f}",
            time_change,
            f"{record.memory_used_bytes:.0f}",
            memory_change,
        ]))

    return "\n".join(lines)


def format_message(message: str) -> str:
    """Section banner printed before each demo step."""
    return f"#### {message}\n"
