from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from ..core.exceptions import ValidationError

NAME_HEADERS = ("name",)
COMPUTING_ID_HEADERS = ("computingid",)

_HEADER_NOISE = re.compile(r"[\s_\-]+")


def normalize_header(header: Any) -> str:
    """'Computing ID', 'computing_id' and 'ComputingId' all become 'computingid'."""
    return _HEADER_NOISE.sub("", str(header)).lower()


def _cell(row: Mapping[str, Any], accepted: tuple[str, ...]) -> str:
    for key, value in row.items():
        if normalize_header(key) in accepted:
            if value is None:
                return ""
            return str(value).strip()
    return ""


@dataclass(frozen=True)
class RosterRow:
    name: str
    computing_id: str


def parse_row(row: Mapping[str, Any]) -> RosterRow:
    name = _cell(row, NAME_HEADERS)
    computing_id = _cell(row, COMPUTING_ID_HEADERS).lower()
    if not name or not computing_id:
        missing = [label for label, value in (("name", name), ("computing ID", computing_id)) if not value]
        raise ValidationError(f"Missing {' and '.join(missing)}")
    return RosterRow(name=name, computing_id=computing_id)
