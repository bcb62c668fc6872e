"""ASCII listing of upcoming occurrences for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from datetime import datetime

_DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _label(value) -> str:
    day_name = _DAY_NAMES[value.weekday()]
    if isinstance(value, datetime):
        return f"{day_name} {value.strftime('%Y-%m-%d %H:%M')}"
    return f"{day_name} {value.strftime('%Y-%m-%d')}"


def show_occurrences(
    expansion: "RecurExpansion",  # noqa: F821
    limit: int = 10,
) -> str:
    """Print the next `limit` occurrences, one per row.

    Works on a copy, so the expansion itself is not advanced.
    Returns the string and also prints to stdout.

    Args:
        expansion: RecurExpansion instance
        limit: Maximum number of rows
    """
    preview = expansion.copy()
    lines: list[str] = [f"{'#':>4s}  occurrence", f"{'':>4s}  {'-' * 20}"]

    for i in range(1, limit + 1):
        value = preview.next()
        if value is None:
            lines.append(f"{'':>4s}  (end)")
            break
        lines.append(f"{i:>4d}  {_label(value)}")

    lines.append(
        f"\nstart: {_label(expansion.start)}, "
        f"rules: {len(expansion.generators)}, "
        f"extra dates: {len(expansion.extra_dates)}, "
        f"excluded: {len(expansion.excluded_dates)}"
    )

    result = "\n".join(lines)
    print(result)
    return result
