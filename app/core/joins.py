"""
Batch join helper for list views.

PostgREST returns flat rows, so every list view follows the same steps:
collect the distinct foreign ids from a base query, fetch the referenced rows
in one IN query per table, and project the base rows through the resulting
lookup tables.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from supabase import Client

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def collect_ids(rows: Iterable[Row], *fields: str) -> List[str]:
    """Distinct non-null values of the given fields, in first-seen order."""
    seen = {}
    for row in rows:
        for field in fields:
            value = row.get(field)
            if value is not None and value not in seen:
                seen[value] = True
    return list(seen)


def batch_fetch(
    supabase: Client,
    table: str,
    ids: List[str],
    key: str = "id",
    columns: str = "*",
    row_filter: Optional[Callable[[Row], bool]] = None,
) -> Dict[str, Row]:
    """Fetch rows of `table` whose `key` is in `ids`, keyed by `key`. Empty ids skip the query."""
    if not ids:
        return {}
    result = supabase.table(table)\
        .select(columns)\
        .in_(key, ids)\
        .execute()
    lookup = {}
    for row in result.data or []:
        if row_filter is not None and not row_filter(row):
            continue
        lookup[row[key]] = row
    logger.debug("batch_fetch %s: %d ids -> %d rows", table, len(ids), len(lookup))
    return lookup


def project(rows: Iterable[Row], lookups: Dict[str, Tuple[str, Dict[str, Row]]]) -> List[Row]:
    """
    Enrich each row with joined records.

    `lookups` maps an output field to (foreign key field, lookup table). The
    joined value is None when the referenced row was not fetched.
    """
    projected = []
    for row in rows:
        item = dict(row)
        for out_field, (fk_field, table) in lookups.items():
            item[out_field] = table.get(row.get(fk_field))
        projected.append(item)
    return projected
