from typing import Any

from covid_api.api.query import LatestRowQuery


def _fetchall_dict(cur) -> list[dict[str, Any]]:
    """Return all rows from current cursor as list[dict], keys lower-cased."""
    cols = [c[0].lower() for c in cur.description]
    return [dict(zip(cols, r)) for r in cur.fetchall()]


def run_query(con, sql: str, params: tuple[Any, ...]) -> list[dict[str, Any]]:
    """Run a parameterized query on the shared connection, return rows as dicts."""
    with con.cursor() as cur:
        cur.execute(sql, params)
        return _fetchall_dict(cur)


def fetch_latest_rows(con, query: LatestRowQuery) -> list[dict[str, Any]]:
    sql, params = query.render()
    return run_query(con, sql, params)
