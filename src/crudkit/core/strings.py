"""Comma-separated rendering helpers used by the query builder."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def to_csv(values: Iterable[Any]) -> str:
    """Join *values* with ``", "`` using ``str()`` on each item."""
    return ", ".join(f"{v}" for v in values)


def to_quoted_csv(values: Iterable[Any]) -> str:
    """Join *values* with ``", "``, wrapping each item in single quotes.

    No escaping is applied: an embedded ``'`` is written verbatim.
    """
    return ", ".join(f"'{v}'" for v in values)


__all__ = [
    "to_csv",
    "to_quoted_csv",
]
