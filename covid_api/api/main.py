from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional, List

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from covid_api.core.config import CORS_ORIGINS, CORS_METHODS, API_EXPOSE_DB_ERRORS
from covid_api.core.constants import (
    INVALID_FILTER_MESSAGE,
    QUERY_FAILED_MESSAGE,
    ROW_SCAN_FAILED_MESSAGE,
)
from covid_api.core.snowflake_conn import get_sf_conn, timeseries_table
from covid_api.api.schemas import FilterCriteria, TimeSeriesRecord, ErrorResponse
from covid_api.api.query import build_latest_query
from covid_api.api.db_snowflake import fetch_latest_rows

logger = logging.getLogger("uvicorn.error")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _invalid_filter(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, INVALID_FILTER_MESSAGE)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # body decoding errors surface as a bare 400 before validation runs
    if exc.status_code == 400:
        return _error(400, INVALID_FILTER_MESSAGE)
    return await http_exception_handler(request, exc)


def create_app(
    connection=None,
    table: Optional[str] = None,
    expose_db_errors: Optional[bool] = None,
) -> FastAPI:
    """
    Build the API. Pass ``connection`` to reuse an existing DB-API connection
    (tests, scripts); otherwise one Snowflake connection is opened on startup
    and a failure there aborts startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = False
        if app.state.connection is None:
            try:
                app.state.connection = get_sf_conn()
            except Exception:
                logger.exception("failed to connect to Snowflake")
                raise
            owned = True
            logger.info("Connected to Snowflake; serving %s", app.state.table)
        yield
        if owned:
            app.state.connection.close()

    app = FastAPI(title="COVID Time Series API", version="1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=CORS_METHODS,
    )
    app.add_exception_handler(RequestValidationError, _invalid_filter)
    app.add_exception_handler(StarletteHTTPException, _http_error)

    app.state.connection = connection
    app.state.table = table or timeseries_table()
    app.state.expose_db_errors = (
        API_EXPOSE_DB_ERRORS if expose_db_errors is None else expose_db_errors
    )

    @app.post(
        "/api/timeseries",
        response_model=List[TimeSeriesRecord],
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    def timeseries(request: Request, criteria: Optional[FilterCriteria] = None):
        criteria = criteria or FilterCriteria()
        state = request.app.state
        query = build_latest_query(criteria, state.table)

        try:
            if state.connection is None:
                raise RuntimeError("database connection is not initialised")
            rows = fetch_latest_rows(state.connection, query)
        except Exception as e:
            logger.exception("timeseries query failed")
            msg = QUERY_FAILED_MESSAGE
            if state.expose_db_errors:
                msg = f"{msg}: {e}"
            return _error(500, msg)

        try:
            records = [TimeSeriesRecord.model_validate(r) for r in rows]
        except ValidationError:
            logger.exception("timeseries row mapping failed")
            return _error(500, ROW_SCAN_FAILED_MESSAGE)

        logger.info("timeseries returned %d rows", len(records))
        return records

    return app


app = create_app()
