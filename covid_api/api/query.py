"""
Latest-row-per-location query.

The base query ranks every row of the time-series table per location
(newest date first) and keeps rank 1. Optional filters are kept as a list
of (clause, params) pairs and rendered into the outer WHERE together with
``rn = 1``, so they apply to the already ranked rows.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from covid_api.core.constants import COLUMNS
from covid_api.api.schemas import FilterCriteria

logger = logging.getLogger("uvicorn.error")


@dataclass
class LatestRowQuery:
    table: str
    conditions: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)

    def where(self, clause: str, *params: Any) -> "LatestRowQuery":
        self.conditions.append((clause, params))
        return self

    def render(self) -> tuple[str, tuple[Any, ...]]:
        """Return (sql, params) with pyformat placeholders for the driver."""
        cols = ",\n               ".join(COLUMNS)
        clauses = ["rn = 1"] + [c for c, _ in self.conditions]
        params: tuple[Any, ...] = ()
        for _, p in self.conditions:
            params += p

        sql = f"""
        WITH ranked AS (
            SELECT {cols},
                   ROW_NUMBER() OVER (PARTITION BY location_key ORDER BY date DESC) AS rn
              FROM {self.table}
        )
        SELECT {cols}
          FROM ranked
         WHERE {" AND ".join(clauses)}
         ORDER BY location_key
        """
        return sql, params


def build_latest_query(criteria: FilterCriteria, table: str) -> LatestRowQuery:
    """Translate the request filters into a LatestRowQuery."""
    q = LatestRowQuery(table=table)

    if criteria.has_date_range():
        q.where("date BETWEEN %s AND %s", criteria.start_date, criteria.end_date)
    elif criteria.start_date or criteria.end_date:
        # one-sided ranges are ignored
        logger.debug("Ignoring partial date range in timeseries filter")

    if criteria.location_key:
        q.where("location_key = %s", criteria.location_key)

    return q
