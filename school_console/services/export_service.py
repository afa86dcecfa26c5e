# /school_console/services/export_service.py

"""
CSV export of list results.

The exported rows are what the screen shows: the server fields plus the
virtual fields computed on load. Nested objects (address, schedule, ...) are
flattened into dotted column names.
"""

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
from pydantic import BaseModel


def _as_row(record: Any) -> Dict[str, Any]:
    if isinstance(record, BaseModel):
        return record.model_dump(by_alias=True, exclude_none=True)
    return dict(record)


def records_to_csv(records: Sequence[Any], columns: Optional[Sequence[str]] = None) -> str:
    """
    Renders `records` (entity models or plain dicts) as CSV text.

    When `columns` is given the output has exactly those columns in that
    order, with blanks for missing values; an empty record list still
    produces the header row.
    """
    rows: List[Dict[str, Any]] = [_as_row(record) for record in records]
    if rows:
        df = pd.json_normalize(rows)
    else:
        df = pd.DataFrame(columns=list(columns or []))

    if columns is not None:
        df = df.reindex(columns=list(columns))
    return df.to_csv(index=False)
