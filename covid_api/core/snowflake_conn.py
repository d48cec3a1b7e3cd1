from __future__ import annotations

import snowflake.connector
from .config import SNOWFLAKE, SNOWFLAKE_LOGIN_TIMEOUT, TIMESERIES_TABLE

# minimal set required to even try connecting
_REQUIRED = ("account", "user", "warehouse")


def have_sf_config() -> bool:
    """True if required fields + either password or authenticator are present."""
    has_required = all(SNOWFLAKE.get(k) for k in _REQUIRED)
    has_auth = bool(SNOWFLAKE.get("password") or SNOWFLAKE.get("authenticator"))
    return bool(has_required and has_auth)


def get_sf_conn():
    """
    Open the long-lived Snowflake connection and set session context
    (role/db/schema/warehouse). Raises on any failure; there is no retry.
    """
    if not have_sf_config():
        raise RuntimeError("Snowflake config missing or incomplete.")

    warehouse = SNOWFLAKE["warehouse"]
    role = SNOWFLAKE.get("role")
    database = SNOWFLAKE.get("database") or "COVID_DB"
    schema = SNOWFLAKE.get("schema") or "PUBLIC"

    kwargs = {
        "user": SNOWFLAKE["user"],
        "account": SNOWFLAKE["account"],
        "warehouse": warehouse,
        "database": database,
        "schema": schema,
        "login_timeout": SNOWFLAKE_LOGIN_TIMEOUT,
    }
    if role:
        kwargs["role"] = role

    # fixed address (e.g. private link or a local endpoint)
    if SNOWFLAKE.get("host"):
        kwargs["host"] = SNOWFLAKE["host"]
    if SNOWFLAKE.get("port"):
        kwargs["port"] = int(SNOWFLAKE["port"])

    # password or external auth
    if SNOWFLAKE.get("authenticator"):
        kwargs["authenticator"] = SNOWFLAKE["authenticator"]
    else:
        kwargs["password"] = SNOWFLAKE["password"]

    conn = snowflake.connector.connect(**kwargs)

    try:
        with conn.cursor() as cur:
            if role:
                cur.execute(f'USE ROLE "{role}"')
            cur.execute(f'USE DATABASE "{database}"')
            cur.execute(f'USE SCHEMA "{schema}"')
            cur.execute(f'USE WAREHOUSE "{warehouse}"')

            # quick sanity check
            cur.execute("SELECT CURRENT_WAREHOUSE()")
            active = (cur.fetchone() or [None])[0]
            if not active or active.upper() != str(warehouse).upper():
                raise RuntimeError(f"Expected warehouse '{warehouse}' but session is on '{active}'")
    except Exception:
        conn.close()
        raise

    return conn


def db_schema() -> tuple[str, str]:
    """Return (database, schema) to build fully qualified names in SQL."""
    return SNOWFLAKE.get("database"), SNOWFLAKE.get("schema")


def timeseries_table() -> str:
    """Fully qualified name of the time-series table."""
    db, sch = db_schema()
    if db and sch:
        return f"{db}.{sch}.{TIMESERIES_TABLE}"
    return TIMESERIES_TABLE
