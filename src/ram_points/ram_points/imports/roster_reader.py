from __future__ import annotations

from typing import IO, Iterator

import pandas as pd

from ..core.exceptions import ValidationError

SUPPORTED_EXTENSIONS = (".csv", ".xlsx", ".xls")


def read_roster(stream: IO, filename: str) -> Iterator[dict]:
    """Yield the first sheet of an uploaded roster as plain dict rows."""

    lowered = (filename or "").lower()
    if not lowered.endswith(SUPPORTED_EXTENSIONS):
        raise ValidationError("Roster must be a .csv, .xlsx or .xls file")

    try:
        if lowered.endswith(".csv"):
            frame = pd.read_csv(stream, dtype=str, keep_default_na=False)
        else:
            frame = pd.read_excel(stream, sheet_name=0, dtype=str)
    except (ValueError, pd.errors.ParserError) as exc:
        raise ValidationError(f"Could not read roster: {exc}")

    frame = frame.fillna("")
    for record in frame.to_dict(orient="records"):
        yield {str(k): v for k, v in record.items()}
