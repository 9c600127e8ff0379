"""
Priority ordering and order restoration shared by every strategy.

Priority order is the processing order only: driest first, then thirstiest,
then input position. Results are always reported in input order.
"""

from __future__ import annotations

from operator import attrgetter
from typing import Iterable, List, Tuple

from irrigation_scheduler.domain.models import FieldRecord


def priority_key(field: FieldRecord) -> Tuple[int, int, int]:
    return (field.moisture, -field.water_needed, field.original_index)


def priority_order(fields: Iterable[FieldRecord]) -> List[FieldRecord]:
    """
    Return fields sorted into processing order.

    The key ends with `original_index`, so equal fields keep input order.
    """
    return sorted(fields, key=priority_key)


def restore_order(fields: Iterable[FieldRecord]) -> List[FieldRecord]:
    """Return fields sorted back into input order."""
    return sorted(fields, key=attrgetter("original_index"))


__all__ = ["priority_key", "priority_order", "restore_order"]
