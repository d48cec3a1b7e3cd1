from datetime import date
from typing import Annotated, Optional

from pydantic import BaseModel, Field

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

Counter = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]


class FilterCriteria(BaseModel):
    """Optional constraints posted to /api/timeseries. Empty means unconstrained."""

    location_key: Optional[str] = Field(None, examples=["US"])
    start_date: Optional[str] = Field(None, examples=["2021-01-01"])
    end_date: Optional[str] = Field(None, examples=["2021-06-30"])

    def has_date_range(self) -> bool:
        return bool(self.start_date) and bool(self.end_date)


class TimeSeriesRecord(BaseModel):
    date: date
    location_key: str
    new_confirmed: Optional[Counter] = None
    new_deceased: Optional[Counter] = None
    new_recovered: Optional[Counter] = None
    new_tested: Optional[Counter] = None
    cumulative_confirmed: Optional[Counter] = None
    cumulative_deceased: Optional[Counter] = None
    cumulative_recovered: Optional[Counter] = None
    cumulative_tested: Optional[Counter] = None


class ErrorResponse(BaseModel):
    error: str
