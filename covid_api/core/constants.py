# Columns of the time-series table, in the order they are selected.
COLUMNS = (
    "location_key",
    "date",
    "new_confirmed",
    "new_deceased",
    "new_recovered",
    "new_tested",
    "cumulative_confirmed",
    "cumulative_deceased",
    "cumulative_recovered",
    "cumulative_tested",
)

INVALID_FILTER_MESSAGE = "Invalid filter parameters"
QUERY_FAILED_MESSAGE = "Query execution failed"
ROW_SCAN_FAILED_MESSAGE = "Row scan failed"
